import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import AdminAccount

pytestmark = pytest.mark.django_db


class TestListAccounts:
    def test_any_admin_can_list(self, admin_client: Client, owner: AdminAccount, admin_account: AdminAccount) -> None:
        response = admin_client.get(reverse("api:list_admin_accounts"))

        assert response.status_code == 200
        assert {a["username"] for a in response.json()} == {"owner", "editor"}
        assert "password" not in response.json()[0]


class TestCreateAccount:
    def test_owner_creates_admin(self, owner_client: Client) -> None:
        payload = {"username": "treasurer", "email": "treasurer@macmaa.test", "password": "pw-123456", "role": "admin"}

        response = owner_client.post(
            reverse("api:create_admin_account"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 201, response.content
        account = AdminAccount.objects.get(username="treasurer")
        assert account.role == AdminAccount.Role.ADMIN
        assert account.check_password("pw-123456")
        assert account.is_staff is False

    def test_duplicate_username_conflicts(self, owner_client: Client, admin_account: AdminAccount) -> None:
        payload = {"username": admin_account.username, "email": "x@macmaa.test", "password": "pw", "role": "admin"}

        response = owner_client.post(
            reverse("api:create_admin_account"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 409
        assert response.json() == {"detail": "Username or email already used"}

    def test_admin_cannot_create(self, admin_client: Client) -> None:
        payload = {"username": "x", "email": "x@macmaa.test", "password": "pw", "role": "owner"}

        response = admin_client.post(
            reverse("api:create_admin_account"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 403
        assert response.json()["code"] == "OWNER_REQUIRED"


class TestUpdateAccount:
    def test_change_email_and_password(self, owner_client: Client, admin_account: AdminAccount) -> None:
        url = reverse("api:update_admin_account", kwargs={"account_id": admin_account.id})

        response = owner_client.patch(
            url, data=orjson.dumps({"email": "new@macmaa.test", "password": "new-pw"}), content_type="application/json"
        )

        assert response.status_code == 200
        admin_account.refresh_from_db()
        assert admin_account.email == "new@macmaa.test"
        assert admin_account.check_password("new-pw")

    def test_empty_update_is_rejected(self, owner_client: Client, admin_account: AdminAccount) -> None:
        url = reverse("api:update_admin_account", kwargs={"account_id": admin_account.id})

        response = owner_client.patch(url, data=orjson.dumps({}), content_type="application/json")

        assert response.status_code == 400
        assert response.json() == {"detail": "No update fields provided"}

    def test_taken_email_conflicts(
        self, owner_client: Client, owner: AdminAccount, admin_account: AdminAccount
    ) -> None:
        url = reverse("api:update_admin_account", kwargs={"account_id": admin_account.id})

        response = owner_client.patch(url, data=orjson.dumps({"email": owner.email}), content_type="application/json")

        assert response.status_code == 409


class TestDeleteAccount:
    def test_delete_admin(self, owner_client: Client, admin_account: AdminAccount) -> None:
        response = owner_client.delete(reverse("api:delete_admin_account", kwargs={"account_id": admin_account.id}))

        assert response.status_code == 204
        assert not AdminAccount.objects.filter(pk=admin_account.pk).exists()

    def test_owner_cannot_be_deleted(self, owner_client: Client, owner: AdminAccount) -> None:
        response = owner_client.delete(reverse("api:delete_admin_account", kwargs={"account_id": owner.id}))

        assert response.status_code == 403
        assert response.json() == {"detail": "Cannot delete owner account"}
        assert AdminAccount.objects.filter(pk=owner.pk).exists()
