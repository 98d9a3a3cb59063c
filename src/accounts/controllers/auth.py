"""This module contains the controllers for the authentication app."""

from ninja_extra import api_controller, route
from ninja_jwt.controller import TokenObtainPairController

from accounts import schema
from accounts.models import AdminAccount
from accounts.service import auth as auth_service
from common.authentication import AdminJWTAuth
from common.throttling import AuthThrottle


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(TokenObtainPairController):
    @route.post("/token/pair", response=schema.AdminTokenPairSchema, url_name="token_obtain_pair")
    def obtain_token(self, payload: schema.AdminLoginSchema) -> schema.AdminTokenPairSchema:  # type: ignore[override]
        """Sign in to the admin dashboard with username and password.

        Only active accounts may sign in. The access token is valid for eight hours and
        carries the account's role; use POST /auth/token/refresh to renew it.
        """
        account = auth_service.authenticate_admin(payload.username, payload.password)
        return auth_service.get_token_pair_for_admin(account)

    @route.post("/token/refresh", response=schema.AdminAccessTokenSchema, url_name="token_refresh")
    def refresh_token(  # type: ignore[override]
        self, payload: schema.AdminTokenRefreshSchema
    ) -> schema.AdminAccessTokenSchema:
        """Trade a refresh token for a new eight-hour access token."""
        return auth_service.refresh_access_token(payload.refresh)

    @route.get("/me", response=schema.AdminAccountSchema, auth=AdminJWTAuth(), url_name="me")
    def me(self) -> AdminAccount:
        """Return the account the token belongs to."""
        return self.context.request.user  # type: ignore[union-attr,return-value]
