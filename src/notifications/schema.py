import datetime as dt
import typing as t

from ninja import Schema
from pydantic import Field


class MemberApplicationInfo(Schema):
    chinese_name: str | None = None
    english_name: str | None = None
    email: str | None = None
    phone: str | None = None
    apply_date: dt.date | str | None = None


class EventRegistrationInfo(Schema):
    event_title_zh: str | None = None
    event_title_en: str | None = None
    name: str = ""
    email: str | None = None
    tickets: int | None = None
    payment_method: str | None = None
    notes: str | None = None
    event_date: dt.date | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None


class EventRegistrationNotificationSchema(EventRegistrationInfo):
    notify_admin_notes: bool = False


class DispatchSummary(Schema):
    user: dict[str, t.Any] | None = None
    admin: dict[str, t.Any] | None = None


class NotificationResponse(Schema):
    ok: bool = True
    result: DispatchSummary = Field(default_factory=DispatchSummary)
