"""Security utilities for session tokens and password handling."""

from datetime import UTC, datetime

from jose import JWTError, jwt
from passlib.context import CryptContext

from roster_admin.config import settings
from roster_admin.schemas.auth import SessionClaims

TOKEN_TYPE = "session"

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def dummy_verify_password() -> None:
    """Spend the same time as a real verification when there is no user."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_session_token(
    subject_id: str,
    subject_name: str,
    now: datetime | None = None,
) -> str:
    """
    Create a signed session token.

    Args:
        subject_id: Staff employee code
        subject_name: Staff display name
        now: Issuance time, defaults to the current time

    Returns:
        Encoded JWT valid for ``session_token_expire_seconds``
    """
    issued_at = int((now or datetime.now(UTC)).timestamp())

    to_encode = {
        "sub": subject_id,
        "name": subject_name,
        "iat": issued_at,
        "exp": issued_at + settings.session_token_expire_seconds,
        "type": TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_session_token(
    token: str,
    now: datetime | None = None,
    secret_key: str | None = None,
) -> SessionClaims | None:
    """
    Decode and validate a session token.

    Every failure (malformed, bad signature, wrong type, missing claims,
    expired) yields None so callers cannot tell the reasons apart.

    Args:
        token: JWT token to decode
        now: Verification time, defaults to the current time
        secret_key: Signing secret, defaults to the configured one

    Returns:
        Session claims or None if invalid
    """
    try:
        # Expiry is checked below so the boundary is exact and the clock injectable
        payload = jwt.decode(
            token,
            secret_key or settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False, "verify_iat": False},
        )
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    subject_id = payload.get("sub")
    subject_name = payload.get("name")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")

    if not isinstance(subject_id, str) or not subject_id:
        return None
    if not isinstance(subject_name, str):
        return None
    if not isinstance(issued_at, int) or not isinstance(expires_at, int):
        return None

    current = int((now or datetime.now(UTC)).timestamp())
    if current >= expires_at:
        return None

    return SessionClaims(
        subject_id=subject_id,
        subject_name=subject_name,
        issued_at=issued_at,
        expires_at=expires_at,
    )
