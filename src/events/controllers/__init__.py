from .event_admin import EventAdminController, RegistrationAdminController
from .events import EventController
from .payments import PaymentController, PaymentProofController
from .stripe_webhook import StripeWebhookController

EVENT_CONTROLLERS = [
    EventController,
    PaymentController,
    PaymentProofController,
    StripeWebhookController,
    EventAdminController,
    RegistrationAdminController,
]

__all__ = ["EVENT_CONTROLLERS"]
