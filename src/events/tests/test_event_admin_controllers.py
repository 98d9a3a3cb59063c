import datetime as dt

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import AdminAccount
from events.models import Event, EventRegistration

pytestmark = pytest.mark.django_db


class TestAdminListEvents:
    def test_includes_unpublished_events(
        self, admin_client: Client, event: Event, unpublished_event: Event, pending_registration: EventRegistration
    ) -> None:
        response = admin_client.get(reverse("api:admin_list_events"))

        assert response.status_code == 200
        by_id = {e["id"]: e for e in response.json()}
        assert set(by_id) == {str(event.id), str(unpublished_event.id), str(pending_registration.event_id)}
        assert by_id[str(pending_registration.event_id)]["tickets_taken"] == 2

    def test_requires_authentication(self, client: Client) -> None:
        assert client.get(reverse("api:admin_list_events")).status_code == 401


class TestAdminUpsertEvent:
    def test_create_event(self, admin_client: Client, admin_account: AdminAccount, next_week: dt.date) -> None:
        payload = {
            "title_zh": "书法班",
            "title_en": "Calligraphy Class",
            "event_date": next_week.isoformat(),
            "start_time": "10:00",
            "location": "Library",
            "fee": "15.00",
            "access_type": "members-only",
            "image_type": "unsplash",
            "image_keyword": "calligraphy",
        }

        response = admin_client.put(
            reverse("api:admin_upsert_event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200, response.content
        event = Event.objects.get(title_en="Calligraphy Class")
        assert event.created_by == admin_account
        assert event.published is True
        assert event.is_members_only
        assert response.json()["image_thumb_url"] == "https://source.unsplash.com/800x600/?calligraphy"

    def test_update_keeps_creator(self, admin_client: Client, owner: AdminAccount, paid_event: Event) -> None:
        paid_event.created_by = owner
        paid_event.save()
        payload = {
            "id": str(paid_event.id),
            "title_zh": paid_event.title_zh,
            "title_en": "Lunar New Year Banquet",
            "event_date": paid_event.event_date.isoformat(),
            "location": paid_event.location,
            "fee": "55.00",
            "published": False,
        }

        response = admin_client.put(
            reverse("api:admin_upsert_event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200
        paid_event.refresh_from_db()
        assert paid_event.title_en == "Lunar New Year Banquet"
        assert paid_event.published is False
        assert paid_event.created_by == owner
        assert paid_event.member_fee is None
        assert paid_event.capacity is None

    def test_negative_fee_is_rejected(self, admin_client: Client, next_week: dt.date) -> None:
        payload = {"title_zh": "x", "title_en": "x", "event_date": next_week.isoformat(), "location": "x", "fee": -1}

        response = admin_client.put(
            reverse("api:admin_upsert_event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 422


class TestAdminDeleteEvent:
    def test_delete_cascades_to_registrations(
        self, admin_client: Client, pending_registration: EventRegistration
    ) -> None:
        url = reverse("api:admin_delete_event", kwargs={"event_id": pending_registration.event_id})

        response = admin_client.delete(url)

        assert response.status_code == 204
        assert not Event.objects.exists()
        assert not EventRegistration.objects.exists()


class TestAdminRegistrations:
    def test_list_filtered_by_event(
        self, admin_client: Client, event: Event, pending_registration: EventRegistration
    ) -> None:
        EventRegistration.objects.create(event=event, name="Other")

        response = admin_client.get(
            reverse("api:admin_list_registrations"), {"event_id": str(pending_registration.event_id)}
        )

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [str(pending_registration.id)]
        assert response.json()[0]["event_title_en"] == "Lunar New Year Dinner"

    @pytest.mark.parametrize("new_status", ["confirmed", "cancelled"])
    def test_update_pending_payment(
        self, admin_client: Client, pending_registration: EventRegistration, new_status: str
    ) -> None:
        url = reverse("api:admin_update_payment_status", kwargs={"registration_id": pending_registration.id})

        response = admin_client.patch(
            url, data=orjson.dumps({"payment_status": new_status}), content_type="application/json"
        )

        assert response.status_code == 200
        pending_registration.refresh_from_db()
        assert pending_registration.payment_status == new_status

    def test_only_pending_payments_change(
        self, admin_client: Client, pending_registration: EventRegistration
    ) -> None:
        EventRegistration.objects.filter(pk=pending_registration.pk).update(
            payment_status=EventRegistration.PaymentStatus.CONFIRMED
        )
        url = reverse("api:admin_update_payment_status", kwargs={"registration_id": pending_registration.id})

        response = admin_client.patch(
            url, data=orjson.dumps({"payment_status": "cancelled"}), content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Only pending payments can be updated"}

    def test_unknown_status_is_rejected(
        self, admin_client: Client, pending_registration: EventRegistration
    ) -> None:
        url = reverse("api:admin_update_payment_status", kwargs={"registration_id": pending_registration.id})

        response = admin_client.patch(
            url, data=orjson.dumps({"payment_status": "expired"}), content_type="application/json"
        )

        assert response.status_code == 422
