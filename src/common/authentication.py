"""Authentication classes for the MACMAA API."""

import typing as t

import structlog
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja_extra import status
from ninja_extra.exceptions import APIException, AuthenticationFailed
from ninja_jwt.authentication import JWTAuth
from ninja_jwt.exceptions import InvalidToken

logger = structlog.get_logger(__name__)


class NotAuthenticated(APIException):
    """Raised when a request carries no usable bearer token or an invalid one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Authentication required")


class PermissionDenied(APIException):
    """Exception raised when the admin doesn't have the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Permission denied")


def _error(message: str, code: str) -> dict[str, str]:
    return {"detail": message, "code": code}


def extract_bearer_token(auth_value: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, or None.

    The header must consist of exactly two space separated parts.
    """
    if not auth_value:
        return None
    parts = auth_value.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return parts[1]


class AdminJWTAuth(JWTAuth):
    """JWT authentication for admin accounts with role checking.

    Every admin account (``admin`` or ``owner`` role) passes by default.
    ``owner_only=True`` restricts the endpoint to owner accounts.

    Usage:
        @api_controller("/admin/accounts", auth=AdminJWTAuth(owner_only=True))
        class AdminAccountController:
            ...
    """

    def __init__(self, *, owner_only: bool = False) -> None:
        """Initialize the AdminJWTAuth authentication class.

        Args:
            owner_only: Whether the endpoint requires the owner role.
        """
        self.owner_only = owner_only
        super().__init__()

    def __call__(self, request: HttpRequest) -> t.Any | None:
        """Authenticate the request, reporting a missing token explicitly."""
        token = extract_bearer_token(request.headers.get(self.header))
        if token is None:
            raise NotAuthenticated(_error(str(_("Missing token")), "MISSING_TOKEN"))
        return self.authenticate(request, token)

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate and verify the admin role.

        Args:
            request: The HTTP request object
            token: The JWT token string

        Returns:
            The authenticated admin account.

        Raises:
            NotAuthenticated: If the token is invalid or expired.
            PermissionDenied: If the account doesn't have the required role.
        """
        try:
            user = super().authenticate(request, token)
        except (InvalidToken, AuthenticationFailed) as e:
            logger.debug("admin_token_rejected", reason=str(e))
            raise NotAuthenticated(_error(str(_("Invalid token")), "INVALID_TOKEN")) from e

        role = getattr(user, "role", None)
        if role not in ("admin", "owner"):
            raise PermissionDenied(_error(str(_("Insufficient permissions")), "INSUFFICIENT_PERMISSIONS"))
        if self.owner_only and role != "owner":
            raise PermissionDenied(_error(str(_("Owner role required")), "OWNER_REQUIRED"))
        return user
