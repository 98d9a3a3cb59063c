from decouple import config

STRIPE_SECRET_KEY = config("STRIPE_SECRET_KEY", default="sk_test_...")
STRIPE_PUBLISHABLE_KEY = config("STRIPE_PUBLISHABLE_KEY", default="pk_test_...")
STRIPE_WEBHOOK_SECRET = config("STRIPE_WEBHOOK_SECRET", default="whsec_...")
STRIPE_PAYMENT_CURRENCY = config("STRIPE_PAYMENT_CURRENCY", default="aud")
# Used when the request carries no usable Origin/Referer/Host.
STRIPE_FALLBACK_ORIGIN = config("STRIPE_FALLBACK_ORIGIN", default="http://localhost:5173")
