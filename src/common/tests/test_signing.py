"""Tests for the HMAC URL signing module."""

import time
from urllib.parse import parse_qs, urlsplit

import pytest

from common.signing import (
    DEFAULT_EXPIRES_IN,
    MAX_EXPIRES_IN,
    MIN_EXPIRES_IN,
    SIGNATURE_LENGTH,
    clamp_expires_in,
    generate_signature,
    generate_signed_url,
    is_protected_path,
    parse_signed_url_params,
    verify_signature,
)


class TestGenerateSignature:
    def test_generates_signature_of_correct_length(self) -> None:
        sig = generate_signature("/media/protected/a.jpg", int(time.time()) + 3600)
        assert len(sig) == SIGNATURE_LENGTH
        assert all(c in "0123456789abcdef" for c in sig)

    def test_different_paths_produce_different_signatures(self) -> None:
        expires = int(time.time()) + 3600
        assert generate_signature("/media/protected/a.jpg", expires) != generate_signature(
            "/media/protected/b.jpg", expires
        )


class TestVerifySignature:
    def test_valid_signature(self) -> None:
        expires = int(time.time()) + 3600
        sig = generate_signature("/media/protected/a.jpg", expires)
        assert verify_signature("/media/protected/a.jpg", str(expires), sig) is True

    def test_expired_signature(self) -> None:
        expires = int(time.time()) - 1
        sig = generate_signature("/media/protected/a.jpg", expires)
        assert verify_signature("/media/protected/a.jpg", str(expires), sig) is False

    def test_tampered_path(self) -> None:
        expires = int(time.time()) + 3600
        sig = generate_signature("/media/protected/a.jpg", expires)
        assert verify_signature("/media/protected/b.jpg", str(expires), sig) is False

    def test_non_numeric_expiry(self) -> None:
        assert verify_signature("/media/protected/a.jpg", "soon", "abc") is False


class TestGenerateSignedUrl:
    def test_signed_url_verifies(self) -> None:
        url = generate_signed_url("protected/payment-proofs/event-registrations/1/a.jpg", expires_in=120)
        parts = urlsplit(url)
        query = parse_qs(parts.query)

        assert parts.path == "/media/protected/payment-proofs/event-registrations/1/a.jpg"
        assert verify_signature(parts.path, query["exp"][0], query["sig"][0])


class TestClampExpiresIn:
    @pytest.mark.parametrize(
        "requested,expected",
        [
            (None, DEFAULT_EXPIRES_IN),
            (0, MIN_EXPIRES_IN),
            (10, MIN_EXPIRES_IN),
            (600, 600),
            (10**7, MAX_EXPIRES_IN),
        ],
    )
    def test_clamps_to_bounds(self, requested: int | None, expected: int) -> None:
        assert clamp_expires_in(requested) == expected


def test_is_protected_path() -> None:
    assert is_protected_path("protected/payment-proofs/x.jpg")
    assert not is_protected_path("public/x.jpg")
    assert not is_protected_path("")


def test_parse_signed_url_params_requires_both_values() -> None:
    assert parse_signed_url_params("/media/protected/a.jpg", None, "sig") is None
    params = parse_signed_url_params("/media/protected/a.jpg", "123", "sig")
    assert params is not None
    assert params.exp == "123"
