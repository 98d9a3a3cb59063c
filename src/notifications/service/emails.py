"""Transactional emails.

Every message is bilingual, Chinese first and English second, and comes as a
plain-text body plus an HTML alternative rendered from
``notifications/emails/<name>.{txt,html}``.

Builders return :class:`EmailContent` objects keyed by audience (``user`` or
``admin``). :func:`deliver_now` sends them in-process and reports what happened;
:func:`deliver_later` queues them on the Celery worker once the current
transaction commits.
"""

import datetime as dt
import typing as t
from functools import partial

import structlog
from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from common.models import SiteSettings
from common.tasks import EmailResult, send_email
from common.utils import format_event_datetime, pick_localized
from notifications.schema import EventRegistrationInfo, MemberApplicationInfo

logger = structlog.get_logger(__name__)

Audience = t.Literal["user", "admin"]

MEMBER_APPLICATION_SUBJECT = "MACMAA 会员申请已提交 / Membership Application Received"
MEMBER_APPLICATION_ADMIN_SUBJECT = "New member application received"
MEMBER_APPROVED_SUBJECT = "MACMAA 会员申请通过 / Membership Approved"
EVENT_REGISTRATION_SUBJECT = "活动报名确认 / Event Registration Confirmed"
EVENT_REGISTRATION_NOTES_SUBJECT = "新活动报名含备注 / New Registration with Notes"
VERIFICATION_CODE_SUBJECT = "MACMAA Member Verification Code"

PAYMENT_METHOD_LABELS = {
    "card": ("银行卡", "Card"),
    "cash": ("现金", "Cash"),
    "transfer": ("银行转账", "Bank transfer"),
    "payid": ("PayID", "PayID"),
}


class EmailContent(t.NamedTuple):
    to: str | None
    subject: str
    body: str
    html_body: str


def _render(template: str, context: dict[str, t.Any]) -> tuple[str, str]:
    body = render_to_string(f"notifications/emails/{template}.txt", context)
    html_body = render_to_string(f"notifications/emails/{template}.html", context)
    return body, html_body


def _admin_email() -> str:
    return SiteSettings.get_solo().admin_notification_email


def _build(to: str | None, subject: str, template: str, context: dict[str, t.Any]) -> EmailContent:
    body, html_body = _render(template, context)
    return EmailContent(to=to, subject=subject, body=body, html_body=html_body)


def member_application_emails(info: MemberApplicationInfo) -> dict[Audience, EmailContent]:
    """The applicant's confirmation and, when an admin inbox is configured, the admin alert."""
    apply_date = info.apply_date or timezone.localdate()
    context = {
        "info": info,
        "name": info.chinese_name or info.english_name or "",
        "apply_date": apply_date.isoformat() if isinstance(apply_date, dt.date) else apply_date,
        "frontend_base_url": SiteSettings.get_solo().frontend_base_url,
    }
    emails: dict[Audience, EmailContent] = {
        "user": _build(info.email, MEMBER_APPLICATION_SUBJECT, "member_application", context),
    }
    if admin_email := _admin_email():
        emails["admin"] = _build(admin_email, MEMBER_APPLICATION_ADMIN_SUBJECT, "member_application_admin", context)
    return emails


def member_approved_email(chinese_name: str | None, english_name: str | None, email: str | None) -> EmailContent:
    context = {
        "chinese_name": chinese_name or "",
        "english_name": english_name or "",
        "name": chinese_name or english_name or "",
    }
    return _build(email, MEMBER_APPROVED_SUBJECT, "member_approved", context)


def _event_datetime(info: EventRegistrationInfo, language: t.Literal["zh", "en"]) -> str:
    if info.event_date is None:
        return ""
    return format_event_datetime(info.event_date, info.start_time, info.end_time, language)


def event_registration_emails(
    info: EventRegistrationInfo, *, notify_admin_notes: bool = False
) -> dict[Audience, EmailContent]:
    """The registrant's confirmation, plus an admin copy when it carries notes worth reading."""
    method_zh, method_en = PAYMENT_METHOD_LABELS.get(info.payment_method or "", ("", info.payment_method or ""))
    context = {
        "info": info,
        "event_title_zh": pick_localized(info.event_title_zh, info.event_title_en, "zh"),
        "event_title_en": pick_localized(info.event_title_zh, info.event_title_en, "en"),
        "event_datetime_zh": _event_datetime(info, "zh"),
        "event_datetime_en": _event_datetime(info, "en"),
        "tickets": info.tickets or 1,
        "payment_method_zh": method_zh,
        "payment_method_en": method_en,
    }
    emails: dict[Audience, EmailContent] = {
        "user": _build(info.email, EVENT_REGISTRATION_SUBJECT, "event_registration", context),
    }
    if notify_admin_notes and info.notes and (admin_email := _admin_email()):
        emails["admin"] = _build(admin_email, EVENT_REGISTRATION_NOTES_SUBJECT, "event_registration_admin", context)
    return emails


def verification_code_email(email: str, code: str, ttl_minutes: int) -> EmailContent:
    return _build(email, VERIFICATION_CODE_SUBJECT, "verification_code", {"code": code, "ttl_minutes": ttl_minutes})


def deliver_now(emails: t.Mapping[Audience, EmailContent]) -> dict[Audience, EmailResult]:
    """Send the emails in-process and return one result per audience."""
    return {
        audience: send_email(to=email.to or "", subject=email.subject, body=email.body, html_body=email.html_body)
        for audience, email in emails.items()
    }


def deliver_later(emails: t.Mapping[Audience, EmailContent]) -> None:
    """Queue the emails for the worker after the surrounding transaction commits.

    Delivery problems end up in the worker log; the caller's request is never affected.
    """
    for audience, email in emails.items():
        if not email.to:
            logger.info("email_not_queued", reason="no-recipient", audience=audience, subject=email.subject)
            continue
        transaction.on_commit(
            partial(send_email.delay, to=email.to, subject=email.subject, body=email.body, html_body=email.html_body)
        )


def notify_member_application(info: MemberApplicationInfo) -> dict[Audience, EmailResult]:
    """Send the application emails right away.

    Raises:
        HttpError: 400 when there is neither an email nor a name to address.
    """
    if not (info.email or info.chinese_name or info.english_name):
        raise HttpError(400, str(_("Missing applicant info")))
    return deliver_now(member_application_emails(info))


def notify_event_registration(
    info: EventRegistrationInfo, *, notify_admin_notes: bool = False
) -> dict[Audience, EmailResult]:
    """Send the registration emails right away.

    Raises:
        HttpError: 400 when the registrant's name is missing.
    """
    if not info.name:
        raise HttpError(400, str(_("Missing registration name")))
    return deliver_now(event_registration_emails(info, notify_admin_notes=notify_admin_notes))
