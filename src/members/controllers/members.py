from ninja_extra import api_controller, route

from common.throttling import PublicSubmissionThrottle, VerificationCodeThrottle
from members import schema
from members.models import Member
from members.service import members as members_service
from members.service import verification


@api_controller("/members", tags=["Members"])
class MemberController:
    @route.post(
        "/apply",
        url_name="member_apply",
        response={201: schema.MemberSchema},
        throttle=PublicSubmissionThrottle(),
    )
    def apply(self, payload: schema.MemberApplicationSchema) -> tuple[int, Member]:
        """Submit a membership application.

        The application starts out pending. The applicant gets a confirmation email and the
        admin inbox is notified.
        """
        return 201, members_service.submit_application(payload)

    @route.post(
        "/verification/send-code",
        url_name="member_send_verification_code",
        response=schema.SendVerificationCodeResponse,
        throttle=VerificationCodeThrottle(),
    )
    def send_code(self, payload: schema.SendVerificationCodeSchema) -> schema.SendVerificationCodeResponse:
        """Email a six digit verification code to an approved member.

        The code is valid for five minutes. ``skipped`` is true when email delivery is not configured.
        """
        return verification.send_verification_code(payload.email)

    @route.post(
        "/verification/verify-code",
        url_name="member_verify_code",
        response=schema.VerifyCodeResponse,
        throttle=VerificationCodeThrottle(),
    )
    def verify_code(self, payload: schema.VerifyCodeSchema) -> schema.VerifyCodeResponse:
        """Exchange a verification code for a member token.

        Pass the token as ``member_token`` when registering for an event or starting a card
        checkout to get the member price.
        """
        return verification.verify_code(payload.email, payload.code)
