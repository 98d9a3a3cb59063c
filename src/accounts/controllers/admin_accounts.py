from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import ControllerBase, api_controller, route

from accounts import schema
from accounts.models import AdminAccount
from accounts.service import admin_accounts as admin_accounts_service
from common.authentication import AdminJWTAuth
from common.throttling import WriteThrottle


@api_controller(
    "/admin-accounts",
    auth=AdminJWTAuth(owner_only=True),
    tags=["Admin Accounts"],
    throttle=WriteThrottle(),
)
class AdminAccountController(ControllerBase):
    def get_one(self, account_id: UUID) -> AdminAccount:
        return self.get_object_or_exception(AdminAccount, pk=account_id)  # type: ignore[no-any-return]

    @route.get("", url_name="list_admin_accounts", response=list[schema.AdminAccountSchema], auth=AdminJWTAuth())
    def list_accounts(self) -> QuerySet[AdminAccount]:
        """List all admin accounts, oldest first."""
        return admin_accounts_service.list_accounts()

    @route.post("", url_name="create_admin_account", response={201: schema.AdminAccountSchema})
    def create_account(self, payload: schema.AdminAccountCreateSchema) -> tuple[int, AdminAccount]:
        """Create an admin or owner account. Returns 409 if the username or email is taken."""
        return 201, admin_accounts_service.create_account(payload)

    @route.patch("/{account_id}", url_name="update_admin_account", response=schema.AdminAccountSchema)
    def update_account(self, account_id: UUID, payload: schema.AdminAccountUpdateSchema) -> AdminAccount:
        """Change an account's email and/or password."""
        return admin_accounts_service.update_account(self.get_one(account_id), payload)

    @route.delete("/{account_id}", url_name="delete_admin_account", response={204: None})
    def delete_account(self, account_id: UUID) -> tuple[int, None]:
        """Delete an admin account. Owner accounts cannot be deleted."""
        admin_accounts_service.delete_account(self.get_one(account_id))
        return 204, None
