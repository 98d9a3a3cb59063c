import typing as t
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q, Sum
from django.utils import timezone

from common.models import TimeStampedModel


class EventQuerySet(models.QuerySet["Event"]):
    def published(self) -> t.Self:
        """Events visible on the public site."""
        return self.filter(published=True)

    def in_calendar_order(self) -> t.Self:
        """Order by date, then start time with untimed events first."""
        return self.order_by("event_date", F("start_time").asc(nulls_first=True))


class Event(TimeStampedModel):
    class AccessType(models.TextChoices):
        MEMBERS_ONLY = "members-only", "Members only"
        ALL_WELCOME = "all-welcome", "All welcome"

    class ImageType(models.TextChoices):
        UNSPLASH = "unsplash", "Unsplash"
        UPLOAD = "upload", "Upload"

    title_zh = models.CharField(max_length=255)
    title_en = models.CharField(max_length=255)
    description_zh = models.TextField(null=True, blank=True)
    description_en = models.TextField(null=True, blank=True)
    event_date = models.DateField(db_index=True)
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=255)
    fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"), validators=[MinValueValidator(0)])
    member_fee = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    capacity = models.PositiveIntegerField(null=True, blank=True, help_text="Empty means unlimited.")
    access_type = models.CharField(max_length=20, choices=AccessType.choices, null=True, blank=True)
    image_type = models.CharField(max_length=20, choices=ImageType.choices, null=True, blank=True)
    image_keyword = models.CharField(max_length=255, null=True, blank=True)
    image_url = models.URLField(max_length=1024, null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="events"
    )
    published = models.BooleanField(default=True, db_index=True)

    objects = EventQuerySet.as_manager()

    class Meta:
        ordering = ["event_date", F("start_time").asc(nulls_first=True)]

    def __str__(self) -> str:
        return f"{self.title_en} ({self.event_date})"

    @property
    def is_free(self) -> bool:
        return self.fee <= 0

    @property
    def is_members_only(self) -> bool:
        return self.access_type == self.AccessType.MEMBERS_ONLY

    def tickets_taken(self) -> int:
        """Tickets held by registrations that aren't cancelled."""
        active = self.registrations.exclude(payment_status=EventRegistration.PaymentStatus.CANCELLED)
        return active.aggregate(total=Sum("tickets"))["total"] or 0


class EventRegistration(TimeStampedModel):
    class PaymentMethod(models.TextChoices):
        CARD = "card", "Card"
        CASH = "cash", "Cash"
        TRANSFER = "transfer", "Bank transfer"
        PAYID = "payid", "PayID"

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        CONFIRMED = "confirmed", "Confirmed"
        CANCELLED = "cancelled", "Cancelled"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(null=True, blank=True)
    tickets = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, null=True, blank=True)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, null=True, blank=True, db_index=True
    )
    payment_proof = models.CharField(max_length=512, null=True, blank=True, help_text="Storage path of the proof.")
    notes = models.TextField(null=True, blank=True)
    member_email = models.EmailField(null=True, blank=True, help_text="Verified member the discount was given to.")
    amount_paid = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    stripe_session_id = models.CharField(max_length=255, null=True, blank=True)
    registration_date = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-registration_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["stripe_session_id"],
                condition=Q(stripe_session_id__isnull=False),
                name="unique_registration_stripe_session",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} x{self.tickets} for {self.event_id}"
