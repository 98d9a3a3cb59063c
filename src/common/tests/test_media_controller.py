from urllib.parse import parse_qs, urlsplit

import pytest
from django.test.client import Client
from django.urls import reverse

from common.signing import generate_signed_url

pytestmark = pytest.mark.django_db

PROOF_PATH = "protected/payment-proofs/event-registrations/1/proof.jpg"


def _validate_url() -> str:
    return reverse("api:validate_media", kwargs={"path": PROOF_PATH})


def test_valid_signature_is_accepted(client: Client) -> None:
    query = parse_qs(urlsplit(generate_signed_url(PROOF_PATH, expires_in=300)).query)

    response = client.get(_validate_url(), {"exp": query["exp"][0], "sig": query["sig"][0]})

    assert response.status_code == 200


def test_missing_signature_is_rejected(client: Client) -> None:
    assert client.get(_validate_url()).status_code == 401


def test_wrong_signature_is_rejected(client: Client) -> None:
    query = parse_qs(urlsplit(generate_signed_url(PROOF_PATH, expires_in=300)).query)

    response = client.get(_validate_url(), {"exp": query["exp"][0], "sig": "0" * 16})

    assert response.status_code == 401
