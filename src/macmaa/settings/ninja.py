from datetime import timedelta

from decouple import config

from .base import SECRET_KEY

JWT_ALGORITHM = config("JWT_ALGORITHM", default="HS256")
JWT_AUDIENCE = config("JWT_AUDIENCE", default="macmaa")

NINJA_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=config("ACCESS_TOKEN_LIFETIME_HOURS", default=8, cast=int)),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=config("REFRESH_TOKEN_LIFETIME_DAYS", default=7, cast=int)),
    "ROTATE_REFRESH_TOKENS": False,
    "ALGORITHM": JWT_ALGORITHM,
    "SIGNING_KEY": SECRET_KEY,
    "AUDIENCE": JWT_AUDIENCE,
    "UPDATE_LAST_LOGIN": True,
}

# Lifetime of the token handed out after a successful member email verification.
MEMBER_TOKEN_LIFETIME = timedelta(minutes=config("MEMBER_TOKEN_LIFETIME_MINUTES", default=60, cast=int))
VERIFICATION_CODE_LIFETIME = timedelta(minutes=config("VERIFICATION_CODE_LIFETIME_MINUTES", default=5, cast=int))

NINJA_EXTRA = {
    "THROTTLE_RATES": {
        "user": "1000/day",
        "anon": "500/day",
    },
    "NUM_PROXIES": None,
}
