from django.http import HttpRequest
from ninja import File, Form
from ninja.files import UploadedFile
from ninja_extra import api_controller, route

from common.authentication import AdminJWTAuth
from common.throttling import PublicSubmissionThrottle
from events import schema
from events.service import payment_proofs, stripe_service


@api_controller("/payments", tags=["Payments"], throttle=PublicSubmissionThrottle())
class PaymentController:
    @route.post("/checkout-session", url_name="create_checkout_session", response=schema.CheckoutSessionResponse)
    def create_checkout_session(
        self, request: HttpRequest, payload: schema.CheckoutSessionCreateSchema
    ) -> schema.CheckoutSessionResponse:
        """Start a Stripe Checkout for a card registration.

        Redirect the payer to ``url``. The registration is recorded once Stripe confirms the
        payment. Without explicit ``success_url``/``cancel_url`` the payer returns to
        ``/events/<id>/register`` on the calling site.
        """
        return stripe_service.create_checkout_session(payload, request)


@api_controller("/payment-proofs", tags=["Payments"])
class PaymentProofController:
    @route.post(
        "",
        url_name="upload_payment_proof",
        response={201: schema.PaymentProofUploadResponse},
        throttle=PublicSubmissionThrottle(),
    )
    def upload(
        self,
        event_id: str | None = Form(None),  # type: ignore[type-arg]
        file: UploadedFile | None = File(None),  # type: ignore[type-arg]
    ) -> tuple[int, schema.PaymentProofUploadResponse]:
        """Upload a bank transfer or PayID receipt (images up to 8 MB).

        Send the returned ``path`` as ``payment_proof`` when registering.
        """
        return 201, schema.PaymentProofUploadResponse(path=payment_proofs.store_payment_proof(event_id, file))

    @route.get(
        "/signed-url", url_name="payment_proof_signed_url", response=schema.SignedUrlResponse, auth=AdminJWTAuth()
    )
    def signed_url(self, path: str = "", expires_in: int | None = None) -> schema.SignedUrlResponse:
        """Get a temporary link to a payment proof.

        ``expires_in`` is in seconds, clamped to 60..86400, default 3600.
        """
        return schema.SignedUrlResponse(signed_url=payment_proofs.signed_proof_url(path, expires_in))
