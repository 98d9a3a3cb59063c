from ninja import Query
from ninja_extra import api_controller, route

from activities import schema
from activities.service import feed
from common.authentication import AdminJWTAuth


@api_controller("/admin/activities", auth=AdminJWTAuth(), tags=["Activities"])
class ActivityController:
    @route.get("", url_name="admin_activities", response=schema.ActivityFeedResponse)
    def recent(
        self, filters: schema.ActivityFeedFilter = Query(...)  # type: ignore[type-arg]
    ) -> schema.ActivityFeedResponse:
        """Recent registrations, membership applications and published news for the dashboard.

        ``days`` sets the window (default 7) and ``limit`` the number of entries (default 5).
        """
        return schema.ActivityFeedResponse(activities=feed.recent_activities(filters))
