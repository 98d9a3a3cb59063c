import datetime as dt
import typing as t
from decimal import Decimal
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import EmailStr, Field, field_validator

from common.schema import OneToTwoFiftyFiveString, PhoneString, UpToTwoFiftyFiveString
from common.utils import resolve_event_image
from events import models

RegistrationPaymentMethod = t.Literal["cash", "transfer", "payid"]
# Stripe rejects metadata values longer than this.
STRIPE_METADATA_VALUE_LIMIT = 500


class EventSchema(ModelSchema):
    image_thumb_url: str
    image_hero_url: str
    is_free: bool

    class Meta:
        model = models.Event
        fields = [
            "id",
            "title_zh",
            "title_en",
            "description_zh",
            "description_en",
            "event_date",
            "start_time",
            "end_time",
            "location",
            "fee",
            "member_fee",
            "capacity",
            "access_type",
            "image_type",
            "image_keyword",
            "image_url",
            "published",
            "created_at",
            "updated_at",
        ]

    @staticmethod
    def resolve_image_thumb_url(obj: models.Event) -> str:
        return resolve_event_image(obj.image_type, obj.image_keyword, obj.image_url, "thumb")

    @staticmethod
    def resolve_image_hero_url(obj: models.Event) -> str:
        return resolve_event_image(obj.image_type, obj.image_keyword, obj.image_url, "hero")

    @staticmethod
    def resolve_is_free(obj: models.Event) -> bool:
        return obj.is_free


class AdminEventSchema(EventSchema):
    created_by_id: UUID | None = None
    tickets_taken: int

    @staticmethod
    def resolve_tickets_taken(obj: models.Event) -> int:
        return obj.tickets_taken()


class EventListFilter(Schema):
    from_date: dt.date | None = None
    limit: int | None = Field(None, ge=1, le=200)
    include_members_only: bool = True


class EventUpsertSchema(Schema):
    id: UUID | None = None
    title_zh: OneToTwoFiftyFiveString
    title_en: OneToTwoFiftyFiveString
    description_zh: str | None = None
    description_en: str | None = None
    event_date: dt.date
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    location: OneToTwoFiftyFiveString
    fee: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    member_fee: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    capacity: int | None = Field(None, ge=0)
    access_type: models.Event.AccessType | None = None
    image_type: models.Event.ImageType | None = None
    image_keyword: str | None = None
    image_url: str | None = None
    published: bool = True


class RegistrationSchema(ModelSchema):
    event_id: UUID

    class Meta:
        model = models.EventRegistration
        fields = [
            "id",
            "name",
            "phone",
            "email",
            "tickets",
            "payment_method",
            "payment_status",
            "payment_proof",
            "notes",
            "member_email",
            "amount_paid",
            "stripe_session_id",
            "registration_date",
            "created_at",
        ]


class AdminRegistrationSchema(RegistrationSchema):
    event_title_zh: str
    event_title_en: str

    @staticmethod
    def resolve_event_title_zh(obj: models.EventRegistration) -> str:
        return obj.event.title_zh

    @staticmethod
    def resolve_event_title_en(obj: models.EventRegistration) -> str:
        return obj.event.title_en


class RegistrationFilter(Schema):
    event_id: UUID | None = None


class RegistrationCreateSchema(Schema):
    name: OneToTwoFiftyFiveString
    phone: PhoneString = ""
    email: EmailStr | None = None
    tickets: int = 1
    payment_method: RegistrationPaymentMethod | None = None
    payment_proof: str | None = None
    notes: str | None = None
    member_token: str | None = None

    @field_validator("notes")
    @classmethod
    def blank_notes_are_none(cls, v: str | None) -> str | None:
        return v.strip() or None if v else None


class PaymentStatusUpdateSchema(Schema):
    payment_status: t.Literal["confirmed", "cancelled"]


class MemberPricingSchema(Schema):
    total_fee: Decimal
    has_member_discount: bool
    member_discount_applied: bool
    savings: Decimal
    member_fee_per_ticket: Decimal
    regular_fee_per_ticket: Decimal


class QuoteRequestSchema(Schema):
    tickets: int = Field(1, ge=1)
    member_token: str | None = None


class QuoteResponseSchema(MemberPricingSchema):
    tickets: int
    stripe_fee: Decimal
    card_total: Decimal


class CheckoutSessionCreateSchema(Schema):
    event_id: UUID | None = None
    name: UpToTwoFiftyFiveString = ""
    tickets: int = 1
    email: EmailStr | None = None
    phone: PhoneString = ""
    notes: str | None = Field(None, max_length=STRIPE_METADATA_VALUE_LIMIT)
    member_token: str | None = None
    success_url: str | None = None
    cancel_url: str | None = None


class CheckoutSessionResponse(Schema):
    session_id: str
    url: str | None


class WebhookReceivedSchema(Schema):
    received: bool = True


class PaymentProofUploadResponse(Schema):
    path: str


class SignedUrlResponse(Schema):
    signed_url: str
