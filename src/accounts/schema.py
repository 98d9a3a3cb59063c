"""Schema for accounts module."""

import datetime
import typing as t

from ninja import ModelSchema, Schema
from pydantic import UUID4, EmailStr, Field

from common.schema import OneToOneFiftyString

from .models import AdminAccount


class AdminAccountSchema(ModelSchema):
    id: UUID4
    created_at: datetime.datetime = Field(alias="date_joined")
    last_login_at: datetime.datetime | None = Field(None, alias="last_login")

    class Meta:
        model = AdminAccount
        fields = ["id", "username", "email", "role", "status"]


class AdminLoginSchema(Schema):
    username: str = ""
    password: str = ""


class AdminTokenPairSchema(Schema):
    access: str
    refresh: str
    id: UUID4
    username: str
    role: str


class AdminTokenRefreshSchema(Schema):
    refresh: str = ""


class AdminAccessTokenSchema(Schema):
    access: str


class AdminAccountCreateSchema(Schema):
    username: OneToOneFiftyString
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: t.Literal["owner", "admin"]


class AdminAccountUpdateSchema(Schema):
    email: EmailStr | None = None
    password: str | None = None
