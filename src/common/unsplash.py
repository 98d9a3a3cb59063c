"""Thin client for the Unsplash API.

The access key never leaves the server; the frontend talks to our proxy
endpoints instead.
"""

import typing as t

import requests
import structlog
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

logger = structlog.get_logger(__name__)

MAX_PER_PAGE = 30
DEFAULT_PER_PAGE = 12


class UnsplashUpstreamError(Exception):
    """Unsplash answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str, detail: str) -> None:
        self.status_code = status_code
        self.error = error
        self.detail = detail
        super().__init__(f"{error} ({status_code})")


def _clamp(value: int | None, default: int, low: int, high: int) -> int:
    return min(max(value or default, low), high)


def pick_photo_fields(photo: dict[str, t.Any]) -> dict[str, t.Any]:
    """Reduce an Unsplash photo to the fields the frontend uses."""
    return {
        "id": photo.get("id"),
        "description": photo.get("description"),
        "alt_description": photo.get("alt_description"),
        "urls": photo.get("urls") or {},
        "user": photo.get("user") or {},
        "links": photo.get("links") or {},
    }


def _get(path: str, params: dict[str, t.Any], error: str) -> t.Any:
    access_key = settings.UNSPLASH_ACCESS_KEY
    if not access_key:
        raise HttpError(500, str(_("Missing UNSPLASH_ACCESS_KEY")))
    response = requests.get(
        f"{settings.UNSPLASH_API_URL}{path}",
        params=params,
        headers={"Authorization": f"Client-ID {access_key}", "Accept-Version": "v1"},
        timeout=settings.UNSPLASH_TIMEOUT,
    )
    if not response.ok:
        logger.warning("unsplash_request_failed", path=path, status_code=response.status_code)
        raise UnsplashUpstreamError(response.status_code, error, response.text or "Unknown error")
    return response.json()


def search_photos(query: str, page: int | None = 1, per_page: int | None = DEFAULT_PER_PAGE) -> dict[str, t.Any]:
    """Search photos. ``per_page`` is clamped to [1, 30] and ``page`` to at least 1."""
    query = (query or "").strip()
    if not query:
        raise HttpError(400, str(_("Missing query parameter")))
    params = {
        "query": query,
        "page": max(page or 1, 1),
        "per_page": _clamp(per_page, DEFAULT_PER_PAGE, 1, MAX_PER_PAGE),
    }
    data = _get("/search/photos", params, "Unsplash search failed")
    return {
        "total": data.get("total", 0),
        "total_pages": data.get("total_pages", 0),
        "results": [pick_photo_fields(photo) for photo in data.get("results") or []],
    }


def random_photos(query: str | None = None, count: int | None = 1) -> dict[str, t.Any]:
    """Fetch random photos, optionally matching a query. ``count`` is clamped to [1, 30]."""
    params: dict[str, t.Any] = {"count": _clamp(count, 1, 1, MAX_PER_PAGE)}
    query = (query or "").strip()
    if query:
        params["query"] = query
    payload = _get("/photos/random", params, "Unsplash random failed")
    photos = payload if isinstance(payload, list) else [payload]
    return {"results": [pick_photo_fields(photo) for photo in photos]}
