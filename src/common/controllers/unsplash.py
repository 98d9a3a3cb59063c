import typing as t

from ninja_extra import api_controller, route

from common import unsplash
from common.schema import UnsplashRandomResponse, UnsplashSearchResponse
from common.throttling import UnsplashThrottle


@api_controller("/unsplash", tags=["Unsplash"], throttle=UnsplashThrottle())
class UnsplashController:
    @route.get("/search", url_name="unsplash_search", response=UnsplashSearchResponse)
    def search(self, query: str = "", page: int = 1, per_page: int = unsplash.DEFAULT_PER_PAGE) -> dict[str, t.Any]:
        """Search Unsplash photos for event and news cover pictures.

        ``per_page`` is clamped to 1..30. Upstream failures are returned with
        Unsplash's status code as ``{"error", "detail"}``.
        """
        return unsplash.search_photos(query, page=page, per_page=per_page)

    @route.get("/random", url_name="unsplash_random", response=UnsplashRandomResponse)
    def random(self, query: str | None = None, count: int = 1) -> dict[str, t.Any]:
        """Get random Unsplash photos, optionally matching a query."""
        return unsplash.random_photos(query, count=count)
