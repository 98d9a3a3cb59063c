"""HMAC-based URL signing for protected uploads.

Payment proofs are private: they are stored under ``protected/`` in the
default storage and only ever exposed through short-lived signed URLs.

URL Format:
    /media/protected/payment-proofs/event-registrations/42/ab12.jpg?exp=1704067200&sig=a1b2c3d4e5f6

The web server asks ``/api/media/validate/<path>`` before serving anything
below ``/media/protected/``.

Security:
    - Key derived from Django's SECRET_KEY with a domain-specific prefix
    - Signatures are 16 hex chars (64 bits), checked with hmac.compare_digest()
    - Expiry is part of the signed message
"""

import hashlib
import hmac
import time
import typing as t
from functools import lru_cache
from urllib.parse import urlencode

from django.conf import settings

__all__ = [
    "PROTECTED_PATH_PREFIX",
    "DEFAULT_EXPIRES_IN",
    "MIN_EXPIRES_IN",
    "MAX_EXPIRES_IN",
    "clamp_expires_in",
    "generate_signature",
    "verify_signature",
    "generate_signed_url",
    "is_protected_path",
    "parse_signed_url_params",
    "SignedURLParams",
]

SIGNATURE_LENGTH = 16

DEFAULT_EXPIRES_IN = 3600
MIN_EXPIRES_IN = 60
MAX_EXPIRES_IN = 86400

_KEY_DOMAIN = "macmaa:signed-url:v1"

PROTECTED_PATH_PREFIX = "protected/"


@lru_cache(maxsize=1)
def _get_signing_key() -> bytes:
    """Get the signing key, derived from Django's SECRET_KEY.

    Computed lazily so settings don't need to be configured at import time.
    """
    return hashlib.sha256(f"{_KEY_DOMAIN}:{settings.SECRET_KEY}".encode()).digest()


def clamp_expires_in(expires_in: int | None) -> int:
    """Clamp a requested URL lifetime to [MIN_EXPIRES_IN, MAX_EXPIRES_IN].

    ``None`` falls back to DEFAULT_EXPIRES_IN.
    """
    if expires_in is None:
        return DEFAULT_EXPIRES_IN
    return max(MIN_EXPIRES_IN, min(expires_in, MAX_EXPIRES_IN))


def generate_signature(path: str, expires: int) -> str:
    """Generate an HMAC signature for a path and expiration timestamp.

    Args:
        path: The URL path (without query string), e.g. "/media/protected/abc.jpg"
        expires: Unix timestamp when the URL expires.

    Returns:
        Hex-encoded signature (truncated to SIGNATURE_LENGTH chars).
    """
    message = f"{path}:{expires}"
    return hmac.new(_get_signing_key(), message.encode(), hashlib.sha256).hexdigest()[:SIGNATURE_LENGTH]


def verify_signature(path: str, exp: str, sig: str) -> bool:
    """Verify a signed URL signature.

    Returns:
        True if the signature is valid and the URL hasn't expired.
    """
    try:
        expires = int(exp)
    except (ValueError, TypeError):
        return False

    if expires <= time.time():
        return False

    expected = generate_signature(path, expires)
    return hmac.compare_digest(sig, expected)


def generate_signed_url(path: str, *, expires_in: int = DEFAULT_EXPIRES_IN) -> str:
    """Generate a signed URL for a stored file.

    Args:
        path: The storage path, e.g. "protected/payment-proofs/event-registrations/1/abc.jpg"
        expires_in: Seconds until the URL expires.

    Returns:
        The media URL path with ``exp`` and ``sig`` query parameters.
    """
    expires = int(time.time()) + expires_in
    media_url = settings.MEDIA_URL.rstrip("/")
    full_path = f"{media_url}/{path}" if not path.startswith("/") else f"{media_url}{path}"
    sig = generate_signature(full_path, expires)
    return f"{full_path}?{urlencode({'exp': expires, 'sig': sig})}"


def is_protected_path(file_path: str) -> bool:
    """Check if a storage path requires signed URL access."""
    if not file_path:
        return False
    return file_path.startswith(PROTECTED_PATH_PREFIX)


class SignedURLParams(t.NamedTuple):
    """Parsed signed URL parameters."""

    path: str
    exp: str
    sig: str


def parse_signed_url_params(full_path: str, exp: str | None, sig: str | None) -> SignedURLParams | None:
    """Bundle the signed URL parameters, or None when one is missing."""
    if not exp or not sig:
        return None
    return SignedURLParams(path=full_path, exp=exp, sig=sig)
