"""Admin account management."""

import structlog
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.exceptions import OwnerAccountProtectedError
from accounts.models import AdminAccount

logger = structlog.get_logger(__name__)


def list_accounts() -> QuerySet[AdminAccount]:
    """All accounts, oldest first."""
    return AdminAccount.objects.order_by("date_joined")


def create_account(payload: schema.AdminAccountCreateSchema) -> AdminAccount:
    """Create an active admin account.

    Raises:
        HttpError: 409 when the username or email is already taken.
    """
    if AdminAccount.objects.filter(Q(username=payload.username) | Q(email__iexact=payload.email)).exists():
        raise HttpError(409, str(_("Username or email already used")))
    try:
        with transaction.atomic():
            account = AdminAccount.objects.create_user(
                username=payload.username,
                email=payload.email,
                password=payload.password,
                role=payload.role,
                status=AdminAccount.Status.ACTIVE,
                is_staff=payload.role == AdminAccount.Role.OWNER,
                is_superuser=payload.role == AdminAccount.Role.OWNER,
            )
    except IntegrityError as e:
        raise HttpError(409, str(_("Username or email already used"))) from e
    logger.info("admin_account_created", account_id=str(account.id), role=account.role)
    return account


@transaction.atomic
def update_account(account: AdminAccount, payload: schema.AdminAccountUpdateSchema) -> AdminAccount:
    """Change the email and/or password of an account.

    Raises:
        HttpError: 400 when neither field is given, 409 when the email is taken.
    """
    if not payload.email and not payload.password:
        raise HttpError(400, str(_("No update fields provided")))
    account = AdminAccount.objects.select_for_update().get(pk=account.pk)
    update_fields = []
    if payload.email:
        if AdminAccount.objects.filter(email__iexact=payload.email).exclude(pk=account.pk).exists():
            raise HttpError(409, str(_("Username or email already used")))
        account.email = payload.email
        update_fields.append("email")
    if payload.password:
        account.set_password(payload.password)
        update_fields.append("password")
    account.save(update_fields=update_fields)
    logger.info("admin_account_updated", account_id=str(account.id), fields=update_fields)
    return account


def delete_account(account: AdminAccount) -> None:
    """Delete an admin account. Owner accounts cannot be deleted.

    Raises:
        OwnerAccountProtectedError: the account is an owner.
    """
    if account.is_owner:
        raise OwnerAccountProtectedError(str(account.id))
    logger.info("admin_account_deleted", account_id=str(account.id))
    account.delete()
