from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route

from common.throttling import PublicSubmissionThrottle
from events import schema
from events.models import Event, EventRegistration
from events.service import event_service, registration_service


@api_controller("/events", tags=["Events"])
class EventController:
    @route.get("", url_name="list_events", response=list[schema.EventSchema])
    def list_events(self, filters: schema.EventListFilter = Query(...)) -> QuerySet[Event]:  # type: ignore[type-arg]
        """List published events by date, untimed events first on each day.

        ``from_date`` hides earlier events, ``limit`` caps the result and
        ``include_members_only=false`` leaves out members-only events.
        """
        return event_service.list_public_events(filters)

    @route.get("/{event_id}", url_name="get_event", response=schema.EventSchema)
    def get_event(self, event_id: UUID) -> Event:
        """Get a published event."""
        return event_service.get_public_event(event_id)

    @route.post("/{event_id}/quote", url_name="quote_event", response=schema.QuoteResponseSchema)
    def quote(self, event_id: UUID, payload: schema.QuoteRequestSchema) -> schema.QuoteResponseSchema:
        """Price a registration.

        With a valid ``member_token`` one ticket is charged at the member price. ``card_total``
        is what a card payment costs once the Stripe fee is added.
        """
        return registration_service.quote(event_service.get_public_event(event_id), payload)

    @route.post(
        "/{event_id}/registrations",
        url_name="register_for_event",
        response={201: schema.RegistrationSchema},
        throttle=PublicSubmissionThrottle(),
    )
    def register(self, event_id: UUID, payload: schema.RegistrationCreateSchema) -> tuple[int, EventRegistration]:
        """Register for an event and pay in cash, by bank transfer or PayID.

        Free events need no payment method. Transfer and PayID registrations need the path of
        a proof uploaded through POST /payment-proofs and stay pending until an admin
        confirms them. Card payments go through POST /payments/checkout-session instead.
        """
        return 201, registration_service.register(event_id, payload)
