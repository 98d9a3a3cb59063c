import datetime as dt
from decimal import Decimal

import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from events.models import Event, EventRegistration
from events.service.payment_proofs import proof_directory


@pytest.fixture
def members_only_event(next_week: dt.date) -> Event:
    return Event.objects.create(
        title_zh="会员茶话会",
        title_en="Members' Tea Party",
        event_date=next_week,
        location="Community Centre",
        fee=Decimal("20.00"),
        member_fee=Decimal("10.00"),
        access_type=Event.AccessType.MEMBERS_ONLY,
    )


@pytest.fixture
def unpublished_event(next_week: dt.date) -> Event:
    return Event.objects.create(
        title_zh="草稿", title_en="Draft", event_date=next_week, location="TBD", published=False
    )


@pytest.fixture
def payment_proof(paid_event: Event) -> str:
    """The storage path of an uploaded proof for the paid event."""
    upload = SimpleUploadedFile("receipt.png", b"\x89PNG\r\n\x1a\n", content_type="image/png")
    return default_storage.save(f"{proof_directory(str(paid_event.pk))}/receipt.png", upload)


@pytest.fixture
def pending_registration(paid_event: Event, payment_proof: str) -> EventRegistration:
    return EventRegistration.objects.create(
        event=paid_event,
        name="Li Na",
        email="lina@macmaa.test",
        tickets=2,
        payment_method=EventRegistration.PaymentMethod.TRANSFER,
        payment_status=EventRegistration.PaymentStatus.PENDING,
        payment_proof=payment_proof,
    )

