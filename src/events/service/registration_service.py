import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from events import schema
from events.models import Event, EventRegistration
from events.service import event_service
from events.service.payment_proofs import is_event_proof
from events.service.pricing import calculate_member_pricing, calculate_stripe_fee, calculate_total_with_stripe_fee
from members.models import Member
from members.service.member_token import resolve_verified_member
from notifications.schema import EventRegistrationInfo
from notifications.service import emails

logger = structlog.get_logger(__name__)

PROOF_REQUIRED_METHODS = {EventRegistration.PaymentMethod.TRANSFER, EventRegistration.PaymentMethod.PAYID}


def ensure_positive_tickets(tickets: int) -> None:
    if tickets <= 0:
        raise HttpError(400, str(_("Tickets must be greater than 0")))


def ensure_member_access(event: Event, member: Member | None) -> None:
    """Members-only events take registrations from verified members only."""
    if event.is_members_only and member is None:
        raise HttpError(403, str(_("This event is for verified members only")))


def quote(event: Event, payload: schema.QuoteRequestSchema) -> schema.QuoteResponseSchema:
    """Price a registration, including what a card payment would cost."""
    member = resolve_verified_member(payload.member_token)
    pricing = calculate_member_pricing(event.fee, event.member_fee, payload.tickets, member is not None)
    return schema.QuoteResponseSchema(
        **pricing.model_dump(),
        tickets=payload.tickets,
        stripe_fee=calculate_stripe_fee(pricing.total_fee),
        card_total=calculate_total_with_stripe_fee(pricing.total_fee),
    )


def registration_email_info(registration: EventRegistration) -> EventRegistrationInfo:
    return EventRegistrationInfo(
        event_title_zh=registration.event.title_zh,
        event_title_en=registration.event.title_en,
        name=registration.name,
        email=registration.email,
        tickets=registration.tickets,
        payment_method=registration.payment_method,
        notes=registration.notes,
        event_date=registration.event.event_date,
        start_time=registration.event.start_time,
        end_time=registration.event.end_time,
    )


def send_registration_emails(registration: EventRegistration) -> None:
    """Queue the registrant's confirmation, with an admin copy when there are notes."""
    info = registration_email_info(registration)
    emails.deliver_later(emails.event_registration_emails(info, notify_admin_notes=bool(registration.notes)))


@transaction.atomic
def register(event_id: object, payload: schema.RegistrationCreateSchema) -> EventRegistration:
    """Register for an event without paying by card.

    Free events need no payment method. Paid events take cash, bank transfer or PayID;
    the last two need an uploaded payment proof and wait for an admin to confirm them.

    Raises:
        HttpError: 400 for invalid tickets, payment method or proof, 403 for a members-only
            event without a member token, 404 for an unknown event.
        EventFullError: not enough tickets left.
    """
    ensure_positive_tickets(payload.tickets)
    event = Event.objects.select_for_update().published().filter(pk=event_id).first()
    if event is None:
        raise HttpError(404, str(_("Event not found")))

    member = resolve_verified_member(payload.member_token)
    ensure_member_access(event, member)
    pricing = calculate_member_pricing(event.fee, event.member_fee, payload.tickets, member is not None)

    payment_method = None
    payment_status = None
    payment_proof = None
    if not event.is_free:
        if payload.payment_method is None:
            raise HttpError(400, str(_("Payment method required for paid events")))
        payment_method = payload.payment_method
        if payment_method in PROOF_REQUIRED_METHODS:
            if not payload.payment_proof:
                raise HttpError(400, str(_("Payment proof required")))
            if not is_event_proof(payload.payment_proof, str(event.pk)):
                raise HttpError(400, str(_("Invalid payment proof")))
            payment_proof = payload.payment_proof
            payment_status = EventRegistration.PaymentStatus.PENDING

    event_service.ensure_capacity(event, payload.tickets)
    registration = EventRegistration.objects.create(
        event=event,
        name=payload.name,
        phone=payload.phone,
        email=payload.email,
        tickets=payload.tickets,
        payment_method=payment_method,
        payment_status=payment_status,
        payment_proof=payment_proof,
        notes=payload.notes,
        member_email=member.email if pricing.member_discount_applied and member else None,
    )
    logger.info(
        "event_registration_created",
        registration_id=str(registration.pk),
        event_id=str(event.pk),
        tickets=registration.tickets,
        payment_method=payment_method,
        member_discount=pricing.member_discount_applied,
    )
    send_registration_emails(registration)
    return registration


def list_registrations(filters: schema.RegistrationFilter) -> QuerySet[EventRegistration]:
    """Registrations, most recent first."""
    qs = EventRegistration.objects.select_related("event").order_by("-registration_date")
    if filters.event_id:
        qs = qs.filter(event_id=filters.event_id)
    return qs


@transaction.atomic
def update_payment_status(
    registration: EventRegistration, payload: schema.PaymentStatusUpdateSchema
) -> EventRegistration:
    """Confirm or reject a pending transfer/PayID payment.

    Raises:
        HttpError: 400 when the registration isn't waiting for confirmation.
    """
    registration = EventRegistration.objects.select_for_update().select_related("event").get(pk=registration.pk)
    if registration.payment_status != EventRegistration.PaymentStatus.PENDING:
        raise HttpError(400, str(_("Only pending payments can be updated")))
    registration.payment_status = payload.payment_status
    registration.save(update_fields=["payment_status", "updated_at"])
    logger.info(
        "event_registration_payment_updated",
        registration_id=str(registration.pk),
        payment_status=registration.payment_status,
    )
    return registration
