"""Tests for the version and healthcheck endpoints and the exception handlers."""

from unittest.mock import MagicMock, patch

import orjson
import pytest
from django.conf import settings
from django.core.exceptions import ValidationError
from django.test.client import Client
from django.urls import reverse

from api.exception_handlers import obfuscate
from events.models import Event

pytestmark = pytest.mark.django_db


def test_version(client: Client) -> None:
    response = client.get(reverse("api:version"))

    assert response.status_code == 200
    assert response.json() == {"version": settings.VERSION}


def test_healthcheck(client: Client) -> None:
    response = client.get(reverse("api:healthcheck"))

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestExceptionHandlers:
    @patch("events.controllers.events.event_service.list_public_events", side_effect=RuntimeError("boom"))
    def test_unexpected_errors_become_500(self, mock_list: MagicMock, client: Client) -> None:
        response = client.get(reverse("api:list_events"))

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error."

    @patch(
        "events.controllers.events.registration_service.register",
        side_effect=ValidationError({"email": ["Enter a valid email address."]}),
    )
    def test_django_validation_errors_become_400(self, mock_register: MagicMock, client: Client, event: Event) -> None:
        response = client.post(
            reverse("api:register_for_event", kwargs={"event_id": event.id}),
            data=orjson.dumps({"name": "Wang Fang"}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json() == {"errors": {"email": ["Enter a valid email address."]}}

    @patch("events.controllers.events.event_service.list_public_events", side_effect=ValidationError("Nope"))
    def test_validation_error_without_fields(self, mock_list: MagicMock, client: Client) -> None:
        response = client.get(reverse("api:list_events"))

        assert response.json() == {"errors": {"__all__": ["Nope"]}}


def test_obfuscate_hides_secrets() -> None:
    data = {"email": "a@b.com", "password": "hunter2", "member_token": "abc", "Code": "123456"}

    assert obfuscate(data) == {
        "email": "a@b.com",
        "password": "********",
        "member_token": "********",
        "Code": "********",
    }
    assert data["password"] == "hunter2"
