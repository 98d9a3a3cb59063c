from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.admin_accounts import AdminAccountController
from accounts.controllers.auth import AuthController
from accounts.exceptions import OwnerAccountProtectedError
from activities.controllers import ActivityController
from common.controllers import MediaValidationController, UnsplashController
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from common.unsplash import UnsplashUpstreamError
from events.controllers import EVENT_CONTROLLERS
from events.exceptions import EventFullError, WebhookHandlingError
from members.controllers import MemberAdminController, MemberController
from members.exceptions import MemberStatusConflictError
from news.controllers import NewsAdminController, NewsController
from notifications.controllers import NotificationController

from .exception_handlers import (
    handle_django_validation_error,
    handle_event_full_error,
    handle_general_exception,
    handle_member_status_conflict_error,
    handle_owner_account_protected_error,
    handle_unsplash_upstream_error,
    handle_webhook_handling_error,
)

api = NinjaExtraAPI(
    title="MACMAA Backend API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"MACMAA API {settings.VERSION}",
    app_name=f"macmaa-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse}, url_name="version")
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk}, url_name="healthcheck")
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, ResponseOk()


api.register_controllers(
    # Admin accounts
    AuthController,
    AdminAccountController,
    # Events, registrations and payments
    *EVENT_CONTROLLERS,
    # Members
    MemberController,
    MemberAdminController,
    # News
    NewsController,
    NewsAdminController,
    # Notifications
    NotificationController,
    # Dashboard
    ActivityController,
    # Media
    UnsplashController,
    MediaValidationController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    MemberStatusConflictError: handle_member_status_conflict_error,
    OwnerAccountProtectedError: handle_owner_account_protected_error,
    EventFullError: handle_event_full_error,
    WebhookHandlingError: handle_webhook_handling_error,
    UnsplashUpstreamError: handle_unsplash_upstream_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
