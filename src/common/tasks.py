"""Common tasks."""

import smtplib
import typing as t
from datetime import timedelta

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils import timezone

from common.models import EmailLog, SiteSettings

logger = structlog.get_logger(__name__)

SMTP_BACKEND = "django.core.mail.backends.smtp.EmailBackend"


class EmailResult(t.TypedDict, total=False):
    ok: bool
    skipped: bool
    reason: str
    error: str
    sent: int


def is_email_configured() -> bool:
    """Whether outgoing mail can be delivered.

    Only the SMTP relay needs credentials; console and locmem backends always work.
    """
    if settings.EMAIL_BACKEND != SMTP_BACKEND:
        return True
    return bool(settings.EMAIL_HOST_PASSWORD)


@shared_task
def send_email(*, to: str | list[str], subject: str, body: str, html_body: str | None = None) -> EmailResult:
    """Send an email and keep a compressed copy in the EmailLog.

    Args:
        to (str | list[str]): The recipient address(es). Blank entries are ignored.
        subject (str): The email subject.
        body (str): The plain-text email body.
        html_body (str | None): The HTML email body.

    Returns:
        EmailResult: ``{"ok": False, "skipped": True, "reason": ...}`` when nothing was sent,
        ``{"ok": False, "error": ...}`` when the mail server refused it, otherwise
        ``{"ok": True, "sent": <number of recipients>}``.
    """
    recipients = [to] if isinstance(to, str) else list(to)
    recipients = [email.strip() for email in recipients if email and email.strip()]
    if not recipients:
        logger.info("email_skipped", reason="no-recipient", subject=subject)
        return {"ok": False, "skipped": True, "reason": "no-recipient"}
    if not is_email_configured():
        logger.warning("email_skipped", reason="missing-api-key", subject=subject)
        return {"ok": False, "skipped": True, "reason": "missing-api-key"}

    site_settings = SiteSettings.get_solo()
    recipients = [to_safe_email_address(email, site_settings=site_settings) for email in recipients]
    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=recipients,
    )
    if html_body:  # pragma: no branch
        email_msg.attach_alternative(html_body, "text/html")
    try:
        email_msg.send(fail_silently=False)
    except (smtplib.SMTPException, OSError) as e:
        logger.exception("email_send_failed", subject=subject, recipient_count=len(recipients))
        return {"ok": False, "error": str(e) or e.__class__.__name__}
    email_logs: list[EmailLog] = []
    for recipient in recipients:
        el = EmailLog(to=recipient, subject=subject, test_only=not site_settings.live_emails)
        el.set_body(body=body)
        if html_body:  # pragma: no branch
            el.set_html(html_body=html_body)
        email_logs.append(el)
    EmailLog.objects.bulk_create(email_logs)
    logger.info("email_sent", subject=subject, recipient_count=len(recipients))
    return {"ok": True, "sent": len(recipients)}


@shared_task
def cleanup_email_logs() -> None:
    """Clean up email logs."""
    older_than_a_month = EmailLog.objects.filter(sent_at__lte=timezone.now() - timedelta(days=30))
    older_than_a_month.delete()

    # drop the bodies of anything older than a week
    older_than_a_week = EmailLog.objects.filter(sent_at__lte=timezone.now() - timedelta(days=7))
    older_than_a_week.update(compressed_body=None, compressed_html=None)


def to_safe_email_address(email: str, site_settings: SiteSettings | None = None) -> str:
    """Convert an email address to a safe format for sending.

    Args:
        email (str): The email address.
        site_settings (SiteSettings): The site settings.

    Returns:
        str: The safe email address.
    """
    site_settings = site_settings or SiteSettings.get_solo()
    if site_settings.live_emails:
        return email
    safe_email = email.replace("@", "_at_").replace(".", "_dot_")
    user, domain = site_settings.internal_catchall_email.split("@", 1)
    safe_email = f"{user}+{safe_email}@{domain}"
    return safe_email
