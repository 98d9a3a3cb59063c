import datetime as dt
import typing as t
from decimal import Decimal

import faker
import pytest
from django.core.cache import cache
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken
from pytest import MonkeyPatch

from accounts.models import AdminAccount
from common.models import SiteSettings
from events.models import Event
from members.models import Member
from members.service.member_token import create_member_token

fake = faker.Faker()


@pytest.fixture(autouse=True)
def increase_rate_limit(monkeypatch: MonkeyPatch) -> None:
    """Increase the rate limits of the throttles so tests don't trip them."""
    for throttle in (
        "AnonDefaultThrottle",
        "UserDefaultThrottle",
        "AuthThrottle",
        "WriteThrottle",
        "PublicSubmissionThrottle",
        "VerificationCodeThrottle",
        "UnsplashThrottle",
    ):
        monkeypatch.setattr(f"common.throttling.{throttle}.rate", "1000/min")


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Start every test with empty throttle history."""
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings: t.Any, tmp_path: t.Any) -> t.Any:
    """Keep uploaded files out of the project tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return tmp_path / "media"


@pytest.fixture
def site_settings(db: None) -> SiteSettings:
    """Site settings with live emails and an admin inbox."""
    site_settings = SiteSettings.get_solo()
    site_settings.live_emails = True
    site_settings.admin_notification_email = "committee@macmaa.test"
    site_settings.save()
    return site_settings


class AdminAccountFactory:
    """Factory for creating AdminAccount instances for testing."""

    def create_account(self, **kwargs: t.Any) -> AdminAccount:
        username = kwargs.pop("username", fake.unique.user_name())
        email = kwargs.pop("email", f"{username}@macmaa.test")
        password = kwargs.pop("password", "a-Strong-password-123!")
        return AdminAccount.objects.create_user(username=username, email=email, password=password, **kwargs)

    def __call__(self, **kwargs: t.Any) -> AdminAccount:
        return self.create_account(**kwargs)


@pytest.fixture
def admin_account_factory(db: None) -> AdminAccountFactory:
    return AdminAccountFactory()


@pytest.fixture
def owner(admin_account_factory: AdminAccountFactory) -> AdminAccount:
    return admin_account_factory(username="owner", role=AdminAccount.Role.OWNER, is_staff=True, is_superuser=True)


@pytest.fixture
def admin_account(admin_account_factory: AdminAccountFactory) -> AdminAccount:
    return admin_account_factory(username="editor", role=AdminAccount.Role.ADMIN)


def _bearer_client(account: AdminAccount) -> Client:
    refresh = RefreshToken.for_user(account)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def owner_client(owner: AdminAccount) -> Client:
    """An API client authenticated as the owner."""
    return _bearer_client(owner)


@pytest.fixture
def admin_client(admin_account: AdminAccount) -> Client:
    """An API client authenticated as a regular admin."""
    return _bearer_client(admin_account)


@pytest.fixture
def next_week() -> dt.date:
    return timezone.localdate() + dt.timedelta(days=7)


@pytest.fixture
def event(db: None, next_week: dt.date) -> Event:
    """A free, published event open to everyone."""
    return Event.objects.create(
        title_zh="中秋晚会",
        title_en="Mid-Autumn Gala",
        event_date=next_week,
        start_time=dt.time(18, 30),
        location="Box Hill Town Hall",
        access_type=Event.AccessType.ALL_WELCOME,
    )


@pytest.fixture
def paid_event(db: None, next_week: dt.date) -> Event:
    """A published event at $50, or $30 for members, with 10 seats."""
    return Event.objects.create(
        title_zh="春节联欢",
        title_en="Lunar New Year Dinner",
        event_date=next_week,
        start_time=dt.time(19, 0),
        location="Glen Waverley",
        fee=Decimal("50.00"),
        member_fee=Decimal("30.00"),
        capacity=10,
        access_type=Event.AccessType.ALL_WELCOME,
    )


class MemberFactory:
    """Factory for creating Member instances for testing."""

    def create_member(self, **kwargs: t.Any) -> Member:
        defaults: dict[str, t.Any] = {
            "chinese_name": "张伟",
            "english_name": fake.name(),
            "gender": Member.Gender.MALE,
            "birthday": dt.date(1960, 5, 17),
            "phone": "0400 000 000",
            "email": fake.unique.email(),
            "address": fake.address(),
            "emergency_name": fake.name(),
            "emergency_phone": "0411 111 111",
            "emergency_relation": "Spouse",
        }
        defaults.update(kwargs)
        return Member.objects.create(**defaults)

    def __call__(self, **kwargs: t.Any) -> Member:
        return self.create_member(**kwargs)


@pytest.fixture
def member_factory(db: None) -> MemberFactory:
    return MemberFactory()


@pytest.fixture
def pending_member(member_factory: MemberFactory) -> Member:
    return member_factory(email="pending@macmaa.test")


@pytest.fixture
def approved_member(member_factory: MemberFactory) -> Member:
    return member_factory(email="member@macmaa.test", status=Member.Status.APPROVED)


@pytest.fixture
def member_token(approved_member: Member) -> str:
    """A member token for the approved member."""
    return create_member_token(approved_member.email)
