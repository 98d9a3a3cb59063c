from ninja_extra import api_controller, route

from common.throttling import PublicSubmissionThrottle
from notifications import schema
from notifications.service import emails


@api_controller("/notifications", tags=["Notifications"], throttle=PublicSubmissionThrottle())
class NotificationController:
    @route.post("/member-application", url_name="notify_member_application", response=schema.NotificationResponse)
    def member_application(self, payload: schema.MemberApplicationInfo) -> schema.NotificationResponse:
        """Email an applicant's confirmation and alert the admin inbox.

        Needs at least an email or a name.
        """
        result = emails.notify_member_application(payload)
        return schema.NotificationResponse(result=schema.DispatchSummary(**result))

    @route.post("/event-registration", url_name="notify_event_registration", response=schema.NotificationResponse)
    def event_registration(
        self, payload: schema.EventRegistrationNotificationSchema
    ) -> schema.NotificationResponse:
        """Email a registration confirmation.

        The admin inbox gets a copy only when ``notify_admin_notes`` is set and the registration has notes.
        """
        info = schema.EventRegistrationInfo(**payload.model_dump(exclude={"notify_admin_notes"}))
        result = emails.notify_event_registration(info, notify_admin_notes=payload.notify_admin_notes)
        return schema.NotificationResponse(result=schema.DispatchSummary(**result))
