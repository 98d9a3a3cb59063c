from django.conf import settings
from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel


class MemberQuerySet(models.QuerySet["Member"]):
    def approved(self) -> "MemberQuerySet":
        return self.filter(status=Member.Status.APPROVED)

    def with_email(self, email: str) -> "MemberQuerySet":
        """Case-insensitive email match."""
        return self.filter(email__iexact=email.strip())


class Member(TimeStampedModel):
    """A membership application and, once approved, a member."""

    class Gender(models.TextChoices):
        MALE = "male", "Male"
        FEMALE = "female", "Female"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    chinese_name = models.CharField(max_length=255)
    english_name = models.CharField(max_length=255, blank=True, default="")
    gender = models.CharField(max_length=10, choices=Gender.choices)
    birthday = models.DateField(null=True, blank=True)
    phone = models.CharField(max_length=50)
    email = models.EmailField(db_index=True)
    address = models.CharField(max_length=512, blank=True, default="")
    emergency_name = models.CharField(max_length=255, blank=True, default="")
    emergency_phone = models.CharField(max_length=50, blank=True, default="")
    emergency_relation = models.CharField(max_length=100, blank=True, default="")
    apply_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    notes = models.TextField(null=True, blank=True)
    handled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="handled_members"
    )

    objects = MemberQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        return self.chinese_name or self.english_name


class MemberVerificationCode(TimeStampedModel):
    """The pending verification code of an email address. Only the hash is stored."""

    email = models.EmailField(unique=True)
    code_hash = models.CharField(max_length=64)
    expires_at = models.DateTimeField(db_index=True)

    def __str__(self) -> str:
        return self.email

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= timezone.now()
