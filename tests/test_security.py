"""Tests for session tokens and password hashing."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from roster_admin.config import settings
from roster_admin.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)

ISSUED = datetime(2026, 3, 2, 8, 0, 0, tzinfo=UTC)
LIFETIME = timedelta(seconds=28800)


def test_session_token_round_trip_claims():
    """Test that a fresh token carries the staff identity."""
    token = create_session_token("1001", "Ana Gómez", now=ISSUED)

    claims = decode_session_token(token, now=ISSUED)

    assert claims is not None
    assert claims.subject_id == "1001"
    assert claims.subject_name == "Ana Gómez"
    assert claims.issued_at == int(ISSUED.timestamp())
    assert claims.expires_at - claims.issued_at == 28800


def test_session_token_valid_until_eight_hours():
    """Test the exact expiry boundary."""
    token = create_session_token("1001", "Ana Gómez", now=ISSUED)

    assert decode_session_token(token, now=ISSUED + LIFETIME - timedelta(seconds=1)) is not None
    assert decode_session_token(token, now=ISSUED + LIFETIME) is None
    assert decode_session_token(token, now=ISSUED + LIFETIME + timedelta(days=1)) is None


def test_session_token_wrong_secret_rejected():
    """Test that a token signed by a different secret is rejected."""
    token = create_session_token("1001", "Ana Gómez", now=ISSUED)

    assert decode_session_token(token, now=ISSUED, secret_key="another-secret") is None

    forged = jwt.encode(
        {
            "sub": "1001",
            "name": "Ana Gómez",
            "iat": int(ISSUED.timestamp()),
            "exp": int((ISSUED + LIFETIME).timestamp()),
            "type": "session",
        },
        "another-secret",
        algorithm=settings.jwt_algorithm,
    )
    assert decode_session_token(forged, now=ISSUED) is None


def test_session_token_malformed_rejected():
    """Test that garbage and truncated tokens are rejected."""
    token = create_session_token("1001", "Ana Gómez", now=ISSUED)

    assert decode_session_token("", now=ISSUED) is None
    assert decode_session_token("not-a-token", now=ISSUED) is None
    assert decode_session_token(token[:-5], now=ISSUED) is None


def test_session_token_requires_session_type_and_claims():
    """Test that correctly signed tokens with the wrong shape are rejected."""
    base = {
        "sub": "1001",
        "name": "Ana Gómez",
        "iat": int(ISSUED.timestamp()),
        "exp": int((ISSUED + LIFETIME).timestamp()),
        "type": "session",
    }

    wrong_type = jwt.encode({**base, "type": "refresh"}, settings.jwt_secret_key)
    assert decode_session_token(wrong_type, now=ISSUED) is None

    no_exp = {key: value for key, value in base.items() if key != "exp"}
    assert decode_session_token(jwt.encode(no_exp, settings.jwt_secret_key), now=ISSUED) is None

    no_sub = {key: value for key, value in base.items() if key != "sub"}
    assert decode_session_token(jwt.encode(no_sub, settings.jwt_secret_key), now=ISSUED) is None


def test_password_hash_is_salted():
    """Test that hashing the same password twice gives different hashes."""
    first = get_password_hash("s3cret")
    second = get_password_hash("s3cret")

    assert first != "s3cret"
    assert first != second
    assert verify_password("s3cret", first)
    assert verify_password("s3cret", second)


def test_password_verification_failures():
    """Test wrong passwords and non-hash stored values."""
    hashed = get_password_hash("s3cret")

    assert not verify_password("S3cret", hashed)
    assert not verify_password("", hashed)
    # Legacy plaintext values are never accepted as hashes
    assert not verify_password("s3cret", "s3cret")
