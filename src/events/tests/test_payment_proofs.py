import typing as t

import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import Client
from django.urls import reverse

from events.models import Event
from events.service.payment_proofs import proof_directory

pytestmark = pytest.mark.django_db


def _image(name: str = "receipt.png", size: int = 16, content_type: str = "image/png") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, b"\x89PNG" + b"0" * (size - 4), content_type=content_type)


class TestUploadPaymentProof:
    def test_upload_stores_file_under_event_directory(self, client: Client, paid_event: Event) -> None:
        response = client.post(
            reverse("api:upload_payment_proof"), {"event_id": str(paid_event.id), "file": _image()}
        )

        assert response.status_code == 201, response.content
        path = response.json()["path"]
        assert path.startswith(f"{proof_directory(str(paid_event.id))}/")
        assert path.endswith(".png")
        assert default_storage.exists(path)

    def test_missing_event_id(self, client: Client) -> None:
        response = client.post(reverse("api:upload_payment_proof"), {"file": _image()})

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing eventId"}

    def test_invalid_event_id(self, client: Client) -> None:
        response = client.post(reverse("api:upload_payment_proof"), {"event_id": "../etc", "file": _image()})

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid eventId"}

    def test_missing_file(self, client: Client, paid_event: Event) -> None:
        response = client.post(reverse("api:upload_payment_proof"), {"event_id": str(paid_event.id)})

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing file"}

    def test_non_image_is_rejected(self, client: Client, paid_event: Event) -> None:
        upload = _image("receipt.pdf", content_type="application/pdf")

        response = client.post(reverse("api:upload_payment_proof"), {"event_id": str(paid_event.id), "file": upload})

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid file type"}

    def test_large_file_is_rejected(self, client: Client, paid_event: Event, settings: t.Any) -> None:
        settings.PAYMENT_PROOF_MAX_BYTES = 8

        response = client.post(
            reverse("api:upload_payment_proof"), {"event_id": str(paid_event.id), "file": _image(size=9)}
        )

        assert response.status_code == 413
        assert response.json() == {"detail": "File too large"}


class TestPaymentProofSignedUrl:
    def test_admin_gets_signed_url(self, admin_client: Client, payment_proof: str) -> None:
        response = admin_client.get(
            reverse("api:payment_proof_signed_url"), {"path": payment_proof, "expires_in": 120}
        )

        assert response.status_code == 200
        signed_url = response.json()["signed_url"]
        assert signed_url.startswith(f"/media/{payment_proof}?exp=")
        assert "&sig=" in signed_url

    @pytest.mark.parametrize(
        "path,detail",
        [
            ("", "Missing path"),
            ("public/receipt.png", "Invalid path"),
            ("protected/../secrets.txt", "Invalid path"),
        ],
    )
    def test_rejects_bad_paths(self, admin_client: Client, path: str, detail: str) -> None:
        response = admin_client.get(reverse("api:payment_proof_signed_url"), {"path": path})

        assert response.status_code == 400
        assert response.json() == {"detail": detail}

    def test_requires_admin(self, client: Client, payment_proof: str) -> None:
        response = client.get(reverse("api:payment_proof_signed_url"), {"path": payment_proof})

        assert response.status_code == 401
