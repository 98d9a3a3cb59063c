from decouple import config

UNSPLASH_ACCESS_KEY = config("UNSPLASH_ACCESS_KEY", default="")
UNSPLASH_API_URL = config("UNSPLASH_API_URL", default="https://api.unsplash.com")
UNSPLASH_TIMEOUT = config("UNSPLASH_TIMEOUT", default=10, cast=int)

PAYMENT_PROOF_MAX_BYTES = config("PAYMENT_PROOF_MAX_BYTES", default=8 * 1024 * 1024, cast=int)
