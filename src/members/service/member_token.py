"""Short-lived tokens that prove a member verified their email address.

Issued by :func:`members.service.verification.verify_code` and accepted by the
event registration and checkout endpoints to unlock the member price.
"""

import typing as t
from datetime import datetime

import jwt
import structlog
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from jwt.exceptions import InvalidTokenError
from ninja.errors import HttpError
from pydantic import BaseModel, ConfigDict, ValidationError, field_serializer

from members.models import Member

logger = structlog.get_logger(__name__)


class MemberTokenPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    aud: str
    sub: str
    exp: datetime
    iat: datetime
    type: t.Literal["member-verified"] = "member-verified"

    @field_serializer("exp")
    def serialize_exp(self, value: datetime) -> int:
        return int(value.timestamp())

    @field_serializer("iat")
    def serialize_iat(self, value: datetime) -> int:
        return int(value.timestamp())


def create_member_token(email: str) -> str:
    """Sign a token for a verified member email."""
    now = timezone.now()
    payload = MemberTokenPayload(
        aud=settings.JWT_AUDIENCE,
        sub=email.strip().lower(),
        iat=now,
        exp=now + settings.MEMBER_TOKEN_LIFETIME,
    )
    return jwt.encode(payload.model_dump(mode="json"), settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def validate_member_token(token: str) -> MemberTokenPayload:
    """Verify and parse a member token.

    Raises:
        HttpError: 400 when the token is malformed, expired or not a member token.
    """
    try:
        decoded = jwt.decode(
            token,
            key=settings.SECRET_KEY,
            audience=settings.JWT_AUDIENCE,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return MemberTokenPayload.model_validate(decoded)
    except (InvalidTokenError, ValidationError) as e:
        logger.info("member_token_rejected", reason=str(e))
        raise HttpError(400, str(_("Invalid or expired member token"))) from e


def resolve_verified_member(token: str | None) -> Member | None:
    """The approved member a token was issued for, or None when no token is given.

    Raises:
        HttpError: 400 for an invalid token or one whose member is no longer approved.
    """
    if not token:
        return None
    payload = validate_member_token(token)
    member = Member.objects.approved().with_email(payload.sub).first()
    if member is None:
        raise HttpError(400, str(_("Invalid or expired member token")))
    return member
