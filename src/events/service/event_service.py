import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import AdminAccount
from events import schema
from events.exceptions import EventFullError
from events.models import Event

logger = structlog.get_logger(__name__)


def list_public_events(filters: schema.EventListFilter) -> QuerySet[Event]:
    """Published events in calendar order."""
    qs = Event.objects.published().in_calendar_order()
    if filters.from_date:
        qs = qs.filter(event_date__gte=filters.from_date)
    if not filters.include_members_only:
        qs = qs.exclude(access_type=Event.AccessType.MEMBERS_ONLY)
    if filters.limit:
        qs = qs[: filters.limit]
    return qs


def get_public_event(event_id: object) -> Event:
    """A published event.

    Raises:
        HttpError: 404 when the event doesn't exist or isn't published.
    """
    try:
        return Event.objects.published().get(pk=event_id)
    except (Event.DoesNotExist, ValueError) as e:
        raise HttpError(404, str(_("Not found"))) from e


def list_admin_events() -> QuerySet[Event]:
    return Event.objects.in_calendar_order()


@transaction.atomic
def upsert_event(payload: schema.EventUpsertSchema, admin: AdminAccount) -> Event:
    """Create an event, or replace every field of an existing one.

    Optional fields left out of the payload are reset to their defaults. The original
    creator is kept when an event is updated.
    """
    data = payload.model_dump(exclude={"id"})
    event = Event.objects.select_for_update().filter(pk=payload.id).first() if payload.id else None
    if event is None:
        event = Event(created_by=admin, **data)
        if payload.id:
            event.pk = payload.id
        created = True
    else:
        for field, value in data.items():
            setattr(event, field, value)
        if event.created_by_id is None:
            event.created_by = admin
        created = False
    event.save()
    logger.info("event_saved", event_id=str(event.pk), created=created, admin_id=str(admin.pk))
    return event


def delete_event(event: Event) -> None:
    logger.info("event_deleted", event_id=str(event.pk), registrations=event.registrations.count())
    event.delete()


def ensure_capacity(event: Event, tickets: int) -> None:
    """Raise EventFullError when ``tickets`` more would exceed the event's capacity."""
    if event.capacity is None:
        return
    remaining = max(event.capacity - event.tickets_taken(), 0)
    if tickets > remaining:
        raise EventFullError(requested=tickets, remaining=remaining)
