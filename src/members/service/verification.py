"""Email verification for member-only prices.

An approved member asks for a six digit code, receives it by email and trades
it for a short-lived member token. Only the SHA-256 hash of a code is stored and
each email address has at most one live code.
"""

import hashlib
import re
import secrets

import structlog
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from members import schema
from members.models import Member, MemberVerificationCode
from members.service.member_token import create_member_token
from notifications.service import emails

logger = structlog.get_logger(__name__)

CODE_LENGTH = 6
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _validated_email(value: str) -> str:
    email = normalize_email(value)
    if not email or not EMAIL_RE.match(email):
        raise HttpError(400, str(_("Invalid email")))
    return email


def _approved_member(email: str) -> Member:
    member = Member.objects.approved().with_email(email).first()
    if member is None:
        raise HttpError(404, str(_("Email not found in member database")))
    return member


def generate_code() -> str:
    return f"{secrets.randbelow(900000) + 100000}"


def hash_code(code: str) -> str:
    return hashlib.sha256(code.encode()).hexdigest()


def purge_expired_codes() -> int:
    deleted, _details = MemberVerificationCode.objects.filter(expires_at__lte=timezone.now()).delete()
    return deleted


def send_verification_code(raw_email: str) -> schema.SendVerificationCodeResponse:
    """Email a fresh code to an approved member, replacing any earlier one.

    Raises:
        HttpError: 400 for a malformed email, 404 when no approved member uses it,
            500 when the mail server refuses the code.
    """
    email = _validated_email(raw_email)
    purge_expired_codes()
    _approved_member(email)

    code = generate_code()
    ttl = settings.VERIFICATION_CODE_LIFETIME
    MemberVerificationCode.objects.update_or_create(
        email=email,
        defaults={"code_hash": hash_code(code), "expires_at": timezone.now() + ttl},
    )
    logger.info("member_verification_code_issued", email=email)

    result = emails.deliver_now(
        {"user": emails.verification_code_email(email, code, ttl_minutes=int(ttl.total_seconds() // 60))}
    )["user"]
    if not result.get("ok") and not result.get("skipped"):
        raise HttpError(500, result.get("error") or str(_("Send failed")))
    return schema.SendVerificationCodeResponse(ok=True, skipped=result.get("skipped", False))


def verify_code(raw_email: str, raw_code: str) -> schema.VerifyCodeResponse:
    """Consume a code and hand out a member token.

    Raises:
        HttpError: 400 for a malformed email or code, or one that is unknown, expired or
            wrong; 404 when the member is no longer approved.
    """
    email = _validated_email(raw_email)
    code = (raw_code or "").strip()
    if len(code) != CODE_LENGTH:
        raise HttpError(400, str(_("Invalid verification code")))

    verification = MemberVerificationCode.objects.filter(email=email).first()
    if verification is None:
        raise HttpError(400, str(_("Invalid or expired verification code")))
    if verification.is_expired:
        verification.delete()
        logger.info("member_verification_code_expired", email=email)
        raise HttpError(400, str(_("Invalid or expired verification code")))
    if not secrets.compare_digest(verification.code_hash, hash_code(code)):
        logger.info("member_verification_code_mismatch", email=email)
        raise HttpError(400, str(_("Invalid or expired verification code")))

    member = _approved_member(email)
    consumed, _details = MemberVerificationCode.objects.filter(pk=verification.pk).delete()
    if not consumed:
        raise HttpError(400, str(_("Invalid or expired verification code")))
    logger.info("member_verified", member_id=str(member.pk))
    return schema.VerifyCodeResponse(
        data=schema.VerifiedMemberSchema(
            name=member.chinese_name or member.english_name or "Member",
            email=member.email or email,
            token=create_member_token(member.email or email),
        )
    )
