import orjson
import pytest
from django.test.client import Client
from django.urls import reverse
from ninja_jwt.tokens import AccessToken

from accounts.models import AdminAccount
from conftest import AdminAccountFactory

pytestmark = pytest.mark.django_db

PASSWORD = "a-Strong-password-123!"


class TestObtainToken:
    def test_login_returns_tokens_with_role(self, client: Client, owner: AdminAccount) -> None:
        response = client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": "owner", "password": PASSWORD}),
            content_type="application/json",
        )

        assert response.status_code == 200, response.content
        data = response.json()
        assert data["username"] == "owner"
        assert data["role"] == "owner"
        assert data["id"] == str(owner.id)
        assert AccessToken(data["access"])["role"] == "owner"
        owner.refresh_from_db()
        assert owner.last_login is not None

    def test_missing_fields(self, client: Client) -> None:
        response = client.post(
            reverse("api:token_obtain_pair"), data=orjson.dumps({"username": "owner"}), content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing username or password"}

    def test_wrong_password(self, client: Client, admin_account: AdminAccount) -> None:
        response = client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": admin_account.username, "password": "nope"}),
            content_type="application/json",
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    def test_disabled_account_cannot_login(
        self, client: Client, admin_account_factory: AdminAccountFactory
    ) -> None:
        account = admin_account_factory(status=AdminAccount.Status.DISABLED)
        assert account.is_active is False

        response = client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": account.username, "password": PASSWORD}),
            content_type="application/json",
        )

        assert response.status_code == 401


class TestMe:
    def test_returns_current_account(self, admin_client: Client, admin_account: AdminAccount) -> None:
        response = admin_client.get(reverse("api:me"))

        assert response.status_code == 200
        assert response.json()["username"] == admin_account.username
        assert response.json()["role"] == "admin"

    def test_requires_token(self, client: Client) -> None:
        response = client.get(reverse("api:me"))

        assert response.status_code == 401
        assert response.json()["code"] == "MISSING_TOKEN"


class TestRefreshToken:
    def _login(self, client: Client, username: str) -> dict[str, str]:
        response = client.post(
            reverse("api:token_obtain_pair"),
            data=orjson.dumps({"username": username, "password": PASSWORD}),
            content_type="application/json",
        )
        return response.json()  # type: ignore[no-any-return]

    def test_refresh_keeps_role(self, client: Client, owner: AdminAccount) -> None:
        tokens = self._login(client, "owner")

        response = client.post(
            reverse("api:token_refresh"),
            data=orjson.dumps({"refresh": tokens["refresh"]}),
            content_type="application/json",
        )

        assert response.status_code == 200, response.content
        assert AccessToken(response.json()["access"])["role"] == "owner"

    def test_invalid_refresh_token(self, client: Client) -> None:
        response = client.post(
            reverse("api:token_refresh"),
            data=orjson.dumps({"refresh": "not-a-token"}),
            content_type="application/json",
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid refresh token"}

    def test_disabled_account_cannot_refresh(self, client: Client, admin_account: AdminAccount) -> None:
        tokens = self._login(client, admin_account.username)
        admin_account.status = AdminAccount.Status.DISABLED
        admin_account.save()

        response = client.post(
            reverse("api:token_refresh"),
            data=orjson.dumps({"refresh": tokens["refresh"]}),
            content_type="application/json",
        )

        assert response.status_code == 401

    def test_missing_refresh_token(self, client: Client) -> None:
        response = client.post(reverse("api:token_refresh"), data=orjson.dumps({}), content_type="application/json")

        assert response.status_code == 400
