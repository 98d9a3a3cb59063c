import stripe
import structlog
from django.conf import settings
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from ninja_extra import api_controller, route

from events import schema
from events.exceptions import WebhookHandlingError
from events.service import stripe_service

logger = structlog.get_logger(__name__)


@api_controller("/stripe", auth=None, tags=["Payments"])
class StripeWebhookController:
    @route.post("/webhook", url_name="stripe_webhook", response={200: schema.WebhookReceivedSchema})
    def handle_webhook(self, request: HttpRequest) -> tuple[int, schema.WebhookReceivedSchema]:
        """Handle incoming Stripe webhooks."""
        payload = request.body
        sig_header = request.META.get("HTTP_STRIPE_SIGNATURE")
        if not sig_header:
            raise HttpError(400, str(_("Missing stripe-signature header")))
        try:
            event = stripe.Webhook.construct_event(payload, sig_header, settings.STRIPE_WEBHOOK_SECRET)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("stripe_webhook_invalid_signature", error=str(e))
            raise HttpError(400, str(_("Invalid signature"))) from e

        try:
            stripe_service.StripeEventHandler(event).handle()
        except WebhookHandlingError:
            raise
        except Exception as e:
            raise WebhookHandlingError(str(e)) from e

        return 200, schema.WebhookReceivedSchema()
