from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import ControllerBase, api_controller, route

from common.authentication import AdminJWTAuth
from common.throttling import WriteThrottle
from events import schema
from events.models import Event, EventRegistration
from events.service import event_service, registration_service


@api_controller("/admin/events", auth=AdminJWTAuth(), tags=["Events Admin"])
class EventAdminController(ControllerBase):
    def get_one(self, event_id: UUID) -> Event:
        return self.get_object_or_exception(Event, pk=event_id)  # type: ignore[no-any-return]

    @route.get("", url_name="admin_list_events", response=list[schema.AdminEventSchema])
    def list_events(self) -> QuerySet[Event]:
        """List all events, published or not, in calendar order."""
        return event_service.list_admin_events()

    @route.put("", url_name="admin_upsert_event", response=schema.AdminEventSchema, throttle=WriteThrottle())
    def upsert_event(self, payload: schema.EventUpsertSchema) -> Event:
        """Create an event, or overwrite the one with the given ``id``.

        Fields left out fall back to their defaults: ``fee`` 0, ``published`` true, everything else empty.
        """
        admin = self.context.request.user  # type: ignore[union-attr]
        return event_service.upsert_event(payload, admin)  # type: ignore[arg-type]

    @route.delete("/{event_id}", url_name="admin_delete_event", response={204: None}, throttle=WriteThrottle())
    def delete_event(self, event_id: UUID) -> tuple[int, None]:
        """Delete an event together with its registrations."""
        event_service.delete_event(self.get_one(event_id))
        return 204, None


@api_controller("/admin/registrations", auth=AdminJWTAuth(), tags=["Events Admin"])
class RegistrationAdminController(ControllerBase):
    def get_one(self, registration_id: UUID) -> EventRegistration:
        return self.get_object_or_exception(EventRegistration, pk=registration_id)  # type: ignore[no-any-return]

    @route.get("", url_name="admin_list_registrations", response=list[schema.AdminRegistrationSchema])
    def list_registrations(
        self, filters: schema.RegistrationFilter = Query(...)  # type: ignore[type-arg]
    ) -> QuerySet[EventRegistration]:
        """List registrations, most recent first, optionally for a single event."""
        return registration_service.list_registrations(filters)

    @route.patch(
        "/{registration_id}/payment-status",
        url_name="admin_update_payment_status",
        response=schema.AdminRegistrationSchema,
        throttle=WriteThrottle(),
    )
    def update_payment_status(
        self, registration_id: UUID, payload: schema.PaymentStatusUpdateSchema
    ) -> EventRegistration:
        """Confirm or cancel a pending bank transfer or PayID payment."""
        return registration_service.update_payment_status(self.get_one(registration_id), payload)
