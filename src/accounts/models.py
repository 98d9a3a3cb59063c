import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class AdminAccountManager(UserManager["AdminAccount"]):
    def create_owner(self, username: str, email: str, password: str) -> "AdminAccount":
        """Create an owner account with access to the Django admin."""
        return self.create_user(
            username=username,
            email=email,
            password=password,
            role=AdminAccount.Role.OWNER,
            is_staff=True,
            is_superuser=True,
        )


class AdminAccount(AbstractUser):
    """An account that can sign in to the MACMAA admin dashboard.

    ``owner`` accounts manage other accounts; ``admin`` accounts manage content.
    """

    class Role(models.TextChoices):
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        DISABLED = "disabled", "Disabled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.ADMIN, db_index=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE, db_index=True)

    objects = AdminAccountManager()  # type: ignore[misc]

    class Meta:
        ordering = ["date_joined"]

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Keep ``is_active`` in line with ``status``."""
        self.is_active = self.status == self.Status.ACTIVE
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "status" in update_fields:
            kwargs["update_fields"] = {*update_fields, "is_active"}
        super().save(*args, **kwargs)

    @property
    def is_owner(self) -> bool:
        return self.role == self.Role.OWNER

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"
