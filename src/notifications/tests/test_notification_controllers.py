import smtplib
from unittest.mock import MagicMock, patch

import orjson
import pytest
from django.core import mail
from django.test.client import Client
from django.urls import reverse

from common.models import SiteSettings

pytestmark = pytest.mark.django_db


class TestNotifyMemberApplication:
    def test_sends_emails(self, client: Client, site_settings: SiteSettings) -> None:
        payload = {"chinese_name": "李娜", "email": "lina@macmaa.test", "phone": "0400 555 666"}

        response = client.post(
            reverse("api:notify_member_application"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200, response.content
        assert response.json() == {
            "ok": True,
            "result": {"user": {"ok": True, "sent": 1}, "admin": {"ok": True, "sent": 1}},
        }
        assert len(mail.outbox) == 2

    @patch("common.tasks.EmailMultiAlternatives.send", side_effect=[smtplib.SMTPServerDisconnected("down"), 1])
    def test_send_failure_still_notifies_admin(
        self, mock_send: MagicMock, client: Client, site_settings: SiteSettings
    ) -> None:
        payload = {"chinese_name": "李娜", "email": "lina@macmaa.test"}

        response = client.post(
            reverse("api:notify_member_application"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200, response.content
        assert response.json() == {
            "ok": True,
            "result": {"user": {"ok": False, "error": "down"}, "admin": {"ok": True, "sent": 1}},
        }
        assert mock_send.call_count == 2

    def test_requires_name_or_email(self, client: Client) -> None:
        response = client.post(
            reverse("api:notify_member_application"), data=orjson.dumps({}), content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing applicant info"}


class TestNotifyEventRegistration:
    def test_user_confirmation_only_by_default(self, client: Client, site_settings: SiteSettings) -> None:
        payload = {"name": "Wang Fang", "email": "wangfang@macmaa.test", "event_title_en": "Gala", "notes": "Hi"}

        response = client.post(
            reverse("api:notify_event_registration"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 200
        assert response.json()["result"] == {"user": {"ok": True, "sent": 1}, "admin": None}
        assert [m.to for m in mail.outbox] == [["wangfang@macmaa.test"]]

    def test_admin_copy_when_requested(self, client: Client, site_settings: SiteSettings) -> None:
        payload = {"name": "Wang Fang", "email": "wangfang@macmaa.test", "notes": "Hi", "notify_admin_notes": True}

        response = client.post(
            reverse("api:notify_event_registration"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.json()["result"]["admin"] == {"ok": True, "sent": 1}

    def test_requires_name(self, client: Client) -> None:
        response = client.post(
            reverse("api:notify_event_registration"),
            data=orjson.dumps({"email": "wangfang@macmaa.test"}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing registration name"}
