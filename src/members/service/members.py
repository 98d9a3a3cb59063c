import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import AdminAccount
from members import schema
from members.exceptions import MemberStatusConflictError
from members.models import Member
from notifications.schema import MemberApplicationInfo
from notifications.service import emails

logger = structlog.get_logger(__name__)


@transaction.atomic
def submit_application(payload: schema.MemberApplicationSchema) -> Member:
    """Store a pending application and email the applicant and the admin inbox."""
    member = Member.objects.create(
        **payload.model_dump(),
        apply_date=timezone.localdate(),
        status=Member.Status.PENDING,
    )
    logger.info("member_application_submitted", member_id=str(member.id))
    info = MemberApplicationInfo(
        chinese_name=member.chinese_name,
        english_name=member.english_name,
        email=member.email,
        phone=member.phone,
        apply_date=member.apply_date,
    )
    emails.deliver_later(emails.member_application_emails(info))
    return member


def list_members() -> QuerySet[Member]:
    """Applications and members, newest first."""
    return Member.objects.select_related("handled_by").order_by("-created_at")


@transaction.atomic
def update_status(member: Member, payload: schema.MemberStatusUpdateSchema, admin: AdminAccount) -> Member:
    """Move a member to a new status.

    When the payload carries ``expected_status`` or ``expected_updated_at`` the update only
    happens if the stored row still matches them, so two admins can't silently overwrite
    each other's decision.

    Raises:
        HttpError: 400 for an unknown status.
        MemberStatusConflictError: the row no longer matches the expectations.
    """
    if payload.status not in Member.Status.values:
        raise HttpError(400, str(_("Invalid status")))

    qs = Member.objects.filter(pk=member.pk)
    if payload.expected_status:
        qs = qs.filter(status=payload.expected_status)
    if payload.expected_updated_at:
        qs = qs.filter(updated_at=payload.expected_updated_at)

    previous_status = member.status
    updated = qs.update(status=payload.status, handled_by=admin, updated_at=timezone.now())
    if not updated:
        logger.info("member_status_conflict", member_id=str(member.pk), requested=payload.status)
        raise MemberStatusConflictError()

    member.refresh_from_db()
    logger.info(
        "member_status_updated",
        member_id=str(member.pk),
        previous_status=previous_status,
        status=member.status,
        admin_id=str(admin.pk),
    )
    if member.status == Member.Status.APPROVED and previous_status != Member.Status.APPROVED:
        approval = emails.member_approved_email(member.chinese_name, member.english_name, member.email)
        emails.deliver_later({"user": approval})
    return member


def delete_member(member: Member) -> None:
    logger.info("member_deleted", member_id=str(member.pk))
    member.delete()
