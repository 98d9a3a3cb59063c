"""Authentication service layer."""

import structlog
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from ninja_jwt.exceptions import TokenError
from ninja_jwt.tokens import RefreshToken

from accounts import schema
from accounts.models import AdminAccount

logger = structlog.get_logger(__name__)


def authenticate_admin(username: str, password: str) -> AdminAccount:
    """Check the credentials of an active admin account.

    Raises:
        HttpError: 400 when a field is missing, 401 when the credentials don't match.
    """
    if not username or not password:
        raise HttpError(400, str(_("Missing username or password")))
    account = AdminAccount.objects.filter(username=username, status=AdminAccount.Status.ACTIVE).first()
    if account is None:
        # Hash anyway: unknown usernames must cost the same as bad passwords.
        AdminAccount().set_password(password)
        logger.info("admin_login_failed", username=username, reason="unknown_or_disabled")
        raise HttpError(401, str(_("Invalid credentials")))
    if not account.check_password(password):
        logger.info("admin_login_failed", username=username, reason="bad_password")
        raise HttpError(401, str(_("Invalid credentials")))
    return account


def get_token_pair_for_admin(account: AdminAccount) -> schema.AdminTokenPairSchema:
    """Issue an access/refresh pair carrying the account's role."""
    account.last_login = timezone.now()
    account.save(update_fields=["last_login"])
    token = RefreshToken.for_user(account)
    token["role"] = account.role
    token["username"] = account.username
    logger.info("admin_login_success", account_id=str(account.id), role=account.role)
    return schema.AdminTokenPairSchema(
        access=str(token.access_token),
        refresh=str(token),
        id=account.id,
        username=account.username,
        role=account.role,
    )


def refresh_access_token(refresh: str) -> schema.AdminAccessTokenSchema:
    """Issue a new access token from a refresh token of a still-active account.

    Raises:
        HttpError: 400 when the token is missing, 401 when it is invalid or the account is gone or disabled.
    """
    if not refresh:
        raise HttpError(400, str(_("Missing refresh token")))
    try:
        token = RefreshToken(refresh)  # type: ignore[arg-type]
    except TokenError as e:
        raise HttpError(401, str(_("Invalid refresh token"))) from e
    if not AdminAccount.objects.filter(pk=token.get("user_id"), status=AdminAccount.Status.ACTIVE).exists():
        raise HttpError(401, str(_("Invalid refresh token")))
    return schema.AdminAccessTokenSchema(access=str(token.access_token))
