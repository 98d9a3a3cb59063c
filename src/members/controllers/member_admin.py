from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import ControllerBase, api_controller, route

from common.authentication import AdminJWTAuth
from common.throttling import WriteThrottle
from members import schema
from members.models import Member
from members.service import members as members_service


@api_controller("/admin/members", auth=AdminJWTAuth(), tags=["Members Admin"])
class MemberAdminController(ControllerBase):
    def get_one(self, member_id: UUID) -> Member:
        return self.get_object_or_exception(Member, pk=member_id)  # type: ignore[no-any-return]

    @route.get("", url_name="list_members", response=list[schema.MemberSchema])
    def list_members(self) -> QuerySet[Member]:
        """List every member and application, newest first."""
        return members_service.list_members()

    @route.patch(
        "/{member_id}", url_name="update_member_status", response=schema.MemberSchema, throttle=WriteThrottle()
    )
    def update_status(self, member_id: UUID, payload: schema.MemberStatusUpdateSchema) -> Member:
        """Approve, reject or reset an application.

        Send ``expected_status`` and/or ``expected_updated_at`` from the row you are looking at;
        if somebody changed it meanwhile the request fails with 409 and nothing is written.
        Approving a member emails them.
        """
        admin = self.context.request.user  # type: ignore[union-attr]
        return members_service.update_status(self.get_one(member_id), payload, admin)  # type: ignore[arg-type]

    @route.delete("/{member_id}", url_name="delete_member", response={204: None}, throttle=WriteThrottle())
    def delete_member(self, member_id: UUID) -> tuple[int, None]:
        """Delete a member record."""
        members_service.delete_member(self.get_one(member_id))
        return 204, None
