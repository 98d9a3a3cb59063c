"""Stripe card payments for event registrations.

Card registrations never touch the database before payment: the checkout
session carries everything needed in its metadata and the registration is
created when Stripe reports the session as paid.
"""

import typing as t
from decimal import Decimal
from urllib.parse import urlsplit

import stripe
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from stripe.checkout import Session

from events import schema
from events.exceptions import WebhookHandlingError
from events.models import Event, EventRegistration
from events.service import event_service
from events.service.pricing import calculate_member_pricing, calculate_total_with_stripe_fee, to_cents
from events.service.registration_service import (
    ensure_member_access,
    ensure_positive_tickets,
    send_registration_emails,
)
from members.service.member_token import resolve_verified_member

logger = structlog.get_logger(__name__)

stripe.api_key = settings.STRIPE_SECRET_KEY


def resolve_origin(request: HttpRequest) -> str:
    """The frontend origin to send the payer back to.

    Tries the ``Origin`` header, then the origin of the ``Referer``, then the
    (forwarded) host, and finally ``STRIPE_FALLBACK_ORIGIN``.
    """
    if origin := request.headers.get("Origin"):
        return origin
    if referer := request.headers.get("Referer"):
        parts = urlsplit(referer)
        if parts.scheme and parts.netloc:
            return f"{parts.scheme}://{parts.netloc}"
    host = request.headers.get("X-Forwarded-Host") or request.headers.get("Host")
    if host:
        protocol = request.headers.get("X-Forwarded-Proto") or "https"
        return f"{protocol}://{host}"
    return t.cast(str, settings.STRIPE_FALLBACK_ORIGIN)


def create_checkout_session(
    payload: schema.CheckoutSessionCreateSchema, request: HttpRequest
) -> schema.CheckoutSessionResponse:
    """Start a Stripe Checkout for a card registration.

    The member price is only applied for a valid member token. The amount charged
    includes the Stripe fee, so the association receives the full ticket price.

    Raises:
        HttpError: 400 for missing fields, bad ticket counts, free events or an invalid
            member token; 403 for members-only events without one; 404 for an unknown
            event; 500 when Stripe rejects the request.
        EventFullError: not enough tickets left.
    """
    name = payload.name.strip()
    if not payload.event_id or not name:
        raise HttpError(400, str(_("Missing required fields: eventId or name")))
    ensure_positive_tickets(payload.tickets)

    event = Event.objects.published().filter(pk=payload.event_id).first()
    if event is None:
        raise HttpError(404, str(_("Event not found")))
    if event.is_free:
        raise HttpError(400, str(_("Free events do not require Stripe payment")))

    member = resolve_verified_member(payload.member_token)
    ensure_member_access(event, member)
    event_service.ensure_capacity(event, payload.tickets)

    pricing = calculate_member_pricing(event.fee, event.member_fee, payload.tickets, member is not None)
    amount = calculate_total_with_stripe_fee(pricing.total_fee)
    member_email = member.email if member and pricing.member_discount_applied else ""

    origin = resolve_origin(request)
    customer_email = payload.email.strip() if payload.email else None
    notes = (payload.notes or "").strip()
    try:
        session = Session.create(
            mode="payment",
            payment_method_types=["card"],
            success_url=payload.success_url or f"{origin}/events/{event.pk}/register?status=success",
            cancel_url=payload.cancel_url or f"{origin}/events/{event.pk}/register?status=cancel",
            customer_email=customer_email,
            client_reference_id=str(event.pk),
            metadata={
                "event_id": str(event.pk),
                "tickets": str(payload.tickets),
                "name": name,
                "email": customer_email or "",
                "phone": payload.phone,
                "notes": notes,
                "member_email": member_email,
            },
            line_items=[
                {
                    "quantity": 1,
                    "price_data": {
                        "currency": settings.STRIPE_PAYMENT_CURRENCY,
                        "unit_amount": to_cents(amount),
                        "product_data": {
                            "name": f"{event.title_zh or event.title_en} x{payload.tickets}",
                            "metadata": {"event_id": str(event.pk)},
                        },
                    },
                }
            ],
        )
    except stripe.StripeError as e:
        logger.exception("stripe_checkout_session_failed", event_id=str(event.pk))
        raise HttpError(500, str(_("Failed to create checkout session"))) from e

    logger.info(
        "stripe_checkout_session_created",
        session_id=session.id,
        event_id=str(event.pk),
        tickets=payload.tickets,
        amount=str(amount),
        member_discount=pricing.member_discount_applied,
    )
    return schema.CheckoutSessionResponse(session_id=session.id, url=session.url)


class StripeEventHandler:
    """Handles the business logic for different types of Stripe webhook events."""

    def __init__(self, event: stripe.Event):
        """Initialize the Stripe event handler."""
        self.event = event

    def handle(self) -> None:
        """Routes the event to the appropriate handler based on its type."""
        event_type = self.event.type
        handler_method = getattr(self, f"handle_{event_type.replace('.', '_')}", self.handle_unknown_event)
        handler_method(self.event)

    def handle_unknown_event(self, event: stripe.Event) -> None:
        logger.info("stripe_webhook_unhandled_event", event_type=event.type, event_id=event.id)

    def handle_checkout_session_completed(self, event: stripe.Event) -> None:
        """Record the card registration of a paid checkout session.

        Deliveries of a session that was already recorded are ignored.

        Raises:
            WebhookHandlingError: the session isn't paid, lacks an event id or names an unknown event.
        """
        session = event.data.object
        session_id = session["id"]
        if session.get("payment_status") != "paid":
            raise WebhookHandlingError(f"Payment not completed for session {session_id}")

        metadata = session.get("metadata") or {}
        event_id = metadata.get("event_id")
        if not event_id:
            logger.warning("stripe_session_missing_event_id", session_id=session_id)
            raise WebhookHandlingError("Missing event_id in metadata")

        try:
            db_event = Event.objects.get(pk=event_id)
        except (Event.DoesNotExist, ValueError, ValidationError) as e:
            raise WebhookHandlingError(f"Event lookup failed for id {event_id}") from e

        if EventRegistration.objects.filter(stripe_session_id=session_id).exists():
            logger.warning("stripe_webhook_duplicate_session", session_id=session_id)
            return

        amount_total = session.get("amount_total")
        try:
            with transaction.atomic():
                registration = EventRegistration.objects.create(
                    event=db_event,
                    name=_clip(metadata.get("name"), "name") or "Guest",
                    email=_valid_email(metadata.get("email")),
                    phone=_clip(metadata.get("phone"), "phone"),
                    tickets=_parse_tickets(metadata.get("tickets")),
                    notes=(metadata.get("notes") or "").strip() or None,
                    member_email=_valid_email(metadata.get("member_email")),
                    payment_method=EventRegistration.PaymentMethod.CARD,
                    payment_status=EventRegistration.PaymentStatus.CONFIRMED,
                    amount_paid=Decimal(amount_total) / 100 if amount_total is not None else None,
                    stripe_session_id=session_id,
                )
        except (IntegrityError, ValidationError) as e:
            if not EventRegistration.objects.filter(stripe_session_id=session_id).exists():
                raise WebhookHandlingError(f"Could not record session {session_id}") from e
            logger.warning("stripe_webhook_duplicate_session", session_id=session_id)
            return

        logger.info(
            "stripe_payment_success",
            session_id=session_id,
            registration_id=str(registration.pk),
            event_id=str(db_event.pk),
            tickets=registration.tickets,
        )
        try:
            send_registration_emails(registration)
        except Exception:
            logger.exception("stripe_webhook_notification_failed", registration_id=str(registration.pk))


def _clip(value: str | None, field_name: str) -> str:
    """Fit a metadata value into the registration field it is stored in."""
    max_length = EventRegistration._meta.get_field(field_name).max_length
    return (value or "").strip()[:max_length]


def _valid_email(value: str | None) -> str | None:
    email = (value or "").strip()
    if not email:
        return None
    try:
        validate_email(email)
    except ValidationError:
        logger.warning("stripe_session_invalid_email_dropped")
        return None
    if len(email) > EventRegistration._meta.get_field("email").max_length:
        logger.warning("stripe_session_invalid_email_dropped")
        return None
    return email


def _parse_tickets(value: str | None) -> int:
    try:
        tickets = int(value or 1)
    except ValueError:
        return 1
    return tickets if tickets > 0 else 1
