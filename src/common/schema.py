"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToOneFiftyString = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]
OneToTwoFiftyFiveString = t.Annotated[str, StringConstraints(min_length=1, max_length=255, strip_whitespace=True)]
UpToTwoFiftyFiveString = t.Annotated[str, StringConstraints(max_length=255, strip_whitespace=True)]
PhoneString = t.Annotated[str, StringConstraints(max_length=50, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ResponseMessage(Schema):
    message: str


class ErrorResponse(Schema):
    detail: str
    code: str | None = None


class ValidationErrorResponse(Schema):
    errors: dict[str, str | list[str]]


class UnsplashPhotoSchema(Schema):
    id: str | None = None
    description: str | None = None
    alt_description: str | None = None
    urls: dict[str, str] = {}
    user: dict[str, t.Any] = {}
    links: dict[str, str] = {}


class UnsplashSearchResponse(Schema):
    total: int
    total_pages: int
    results: list[UnsplashPhotoSchema]


class UnsplashRandomResponse(Schema):
    results: list[UnsplashPhotoSchema]


