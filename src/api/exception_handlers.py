"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from accounts.exceptions import OwnerAccountProtectedError
from common.unsplash import UnsplashUpstreamError
from events.exceptions import EventFullError, WebhookHandlingError
from members.exceptions import MemberStatusConflictError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            body = orjson.loads(request.body)
            json_payload = obfuscate(body) if isinstance(body, dict) else None
        except orjson.JSONDecodeError:  # pragma: no cover
            json_payload = None
    else:
        json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        query=obfuscate(request.GET.dict()),
        payload=json_payload,
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    data = {"detail": "Internal Server Error."}
    if settings.DEBUG:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("VALIDATION_ERROR", path=request.path, exc_info=True)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_member_status_conflict_error(
    request: HttpRequest, exc: MemberStatusConflictError | t.Type[MemberStatusConflictError]
) -> Response:
    """Handle a member row that changed under the admin's feet."""
    return Response(status=409, data={"detail": "Conflict"})


def handle_owner_account_protected_error(
    request: HttpRequest, exc: OwnerAccountProtectedError | t.Type[OwnerAccountProtectedError]
) -> Response:
    """Handle an attempt to delete an owner account."""
    return Response(status=403, data={"detail": "Cannot delete owner account"})


def handle_event_full_error(request: HttpRequest, exc: EventFullError | t.Type[EventFullError]) -> Response:
    """Handle a registration that exceeds the remaining capacity."""
    remaining = getattr(exc, "remaining", 0)
    return Response(status=400, data={"detail": "Event is full", "remaining": remaining})


def handle_webhook_handling_error(
    request: HttpRequest, exc: WebhookHandlingError | t.Type[WebhookHandlingError]
) -> Response:
    """Handle a Stripe event that could not be processed. Stripe retries on 5xx."""
    logger.error("stripe_webhook_handling_failed", error=str(exc))
    return Response(status=500, data={"detail": "Webhook handling failed"})


def handle_unsplash_upstream_error(
    request: HttpRequest, exc: UnsplashUpstreamError | t.Type[UnsplashUpstreamError]
) -> Response:
    """Relay Unsplash's status code and error."""
    return Response(status=exc.status_code, data={"error": exc.error, "detail": exc.detail})  # type: ignore[arg-type]


SENSITIVE_KEYS = {"password", "token", "member_token", "code", "x-api-key", "authorization", "authentication"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
