"""Media validation endpoint for the web server's forward-auth check.

Files below ``/media/protected/`` are only served when this endpoint accepts
the ``exp``/``sig`` pair of the requested URL. The endpoint is unauthenticated:
the HMAC signature is the credential.
"""

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from ninja_extra import api_controller, route

from common.signing import parse_signed_url_params, verify_signature
from common.throttling import MediaValidationThrottle


@api_controller("/media", tags=["Media"])
class MediaValidationController:
    @route.get(
        "/validate/{path:path}",
        url_name="validate_media",
        response={200: None, 401: None},
        throttle=MediaValidationThrottle(),
    )
    def validate_media(self, request: HttpRequest, path: str) -> HttpResponse:
        """Validate a signed URL for protected media access.

        The signed path is reconstructed as ``{MEDIA_URL}{path}``.
        Returns 200 to allow access, 401 to deny.
        """
        media_url = settings.MEDIA_URL.rstrip("/")
        params = parse_signed_url_params(f"{media_url}/{path}", request.GET.get("exp"), request.GET.get("sig"))
        if params is None:
            return HttpResponse(status=401)

        if not verify_signature(params.path, params.exp, params.sig):
            return HttpResponse(status=401)

        return HttpResponse(status=200)
