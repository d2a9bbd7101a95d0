"""Tests for login, logout and session cookie handling."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from roster_admin.config import settings
from roster_admin.core.security import create_session_token, decode_session_token

LOGIN_URL = "/api/v1/auth/login"
LOGOUT_URL = "/api/v1/auth/logout"
ME_URL = "/api/v1/auth/me"

# Matches the password seeded by the staff_members fixture
STAFF_PASSWORD = "correct-horse-battery"  # pragma: allowlist secret


def cookie_value(set_cookie: str) -> str:
    """Extract the cookie value from a Set-Cookie header."""
    return set_cookie.split(";", 1)[0].split("=", 1)[1]


# ============================================================================
# Login
# ============================================================================


@pytest.mark.asyncio
async def test_login_success_sets_session_cookie(client: AsyncClient, staff_members):
    """Test successful login returns the identity and a hardened cookie."""
    response = await client.post(
        LOGIN_URL, json={"employee_code": "1001", "password": STAFF_PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["staff"] == {"employee_code": "1001", "display_name": "Ana Gómez"}
    # The token only travels in the cookie
    assert "token" not in data

    set_cookie = response.headers["set-cookie"]
    attributes = set_cookie.lower()
    assert set_cookie.startswith(f"{settings.session_cookie_name}=")
    assert "httponly" in attributes
    assert "samesite=strict" in attributes
    assert "path=/" in attributes
    assert "max-age=28800" in attributes
    assert "secure" not in attributes

    claims = decode_session_token(cookie_value(set_cookie))
    assert claims is not None
    assert claims.subject_id == "1001"
    assert claims.subject_name == "Ana Gómez"
    assert claims.expires_at - claims.issued_at == 28800


@pytest.mark.asyncio
async def test_login_cookie_secure_when_configured(
    client: AsyncClient, staff_members, monkeypatch
):
    """Test the Secure attribute is set when enabled."""
    monkeypatch.setattr(settings, "cookie_secure", True)

    response = await client.post(
        LOGIN_URL, json={"employee_code": "1001", "password": STAFF_PASSWORD}
    )

    assert response.status_code == 200
    assert "secure" in response.headers["set-cookie"].lower()


@pytest.mark.asyncio
async def test_login_trims_employee_code(client: AsyncClient, staff_members):
    """Test surrounding whitespace in the employee code is ignored."""
    response = await client.post(
        LOGIN_URL, json={"employee_code": " 1002 ", "password": STAFF_PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["staff"]["employee_code"] == "1002"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"employee_code": "1001"},
        {"password": STAFF_PASSWORD},
        {"employee_code": "   ", "password": STAFF_PASSWORD},
        {"employee_code": "1001", "password": ""},
    ],
)
async def test_login_missing_credentials(client: AsyncClient, staff_members, payload):
    """Test that missing or blank fields are rejected with 400."""
    response = await client.post(LOGIN_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing credentials"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"data": {"employee_code": "1001", "password": STAFF_PASSWORD}},
        {"content": b"{bad", "headers": {"Content-Type": "application/json"}},
        {"json": ["1001", STAFF_PASSWORD]},
    ],
    ids=["no-body", "form-encoded", "malformed-json", "not-an-object"],
)
async def test_login_unreadable_body_is_missing_credentials(
    client: AsyncClient, staff_members, kwargs
):
    """Test bodies that carry no readable credentials are reported as missing."""
    response = await client.post(LOGIN_URL, **kwargs)

    assert response.status_code == 400
    assert response.json() == {
        "error": "ValidationException",
        "message": "Missing credentials",
        "path": LOGIN_URL,
    }
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_login_invalid_credentials_are_indistinguishable(
    client: AsyncClient, staff_members
):
    """Test wrong password and unknown user produce the same response."""
    wrong_password = await client.post(
        LOGIN_URL, json={"employee_code": "1001", "password": "not-the-password"}
    )
    unknown_user = await client.post(
        LOGIN_URL, json={"employee_code": "4040", "password": STAFF_PASSWORD}
    )

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["message"] == "Invalid credentials"
    assert "set-cookie" not in wrong_password.headers
    assert "set-cookie" not in unknown_user.headers


@pytest.mark.asyncio
async def test_login_wrong_method(client: AsyncClient):
    """Test that GET on the login endpoint is rejected with 405."""
    response = await client.get(LOGIN_URL)

    assert response.status_code == 405
    assert response.json()["error"] == "MethodNotAllowedException"


@pytest.mark.asyncio
async def test_login_then_use_cookie(client: AsyncClient, staff_members):
    """Test the issued cookie authenticates later requests."""
    login = await client.post(
        LOGIN_URL, json={"employee_code": "1002", "password": STAFF_PASSWORD}
    )
    token = cookie_value(login.headers["set-cookie"])

    client.cookies.set(settings.session_cookie_name, token)
    response = await client.get(ME_URL)

    assert response.status_code == 200
    assert response.json() == {"employee_code": "1002", "display_name": "Luis Pérez"}


# ============================================================================
# Session checks
# ============================================================================


@pytest.mark.asyncio
async def test_me_without_cookie(client: AsyncClient):
    """Test requests without a session cookie are rejected."""
    response = await client.get(ME_URL)

    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized"


@pytest.mark.asyncio
async def test_invalid_sessions_look_the_same(client: AsyncClient):
    """Test missing, forged and expired sessions produce identical responses."""
    missing = await client.get(ME_URL)

    forged_token = jwt.encode(
        {
            "sub": "1001",
            "name": "Ana Gómez",
            "iat": int(datetime.now(UTC).timestamp()),
            "exp": int((datetime.now(UTC) + timedelta(hours=1)).timestamp()),
            "type": "session",
        },
        "a-different-secret",
        algorithm="HS256",
    )
    client.cookies.set(settings.session_cookie_name, forged_token)
    forged = await client.get(ME_URL)

    expired_token = create_session_token(
        "1001", "Ana Gómez", now=datetime.now(UTC) - timedelta(hours=9)
    )
    client.cookies.set(settings.session_cookie_name, expired_token)
    expired = await client.get(ME_URL)

    client.cookies.set(settings.session_cookie_name, "garbage")
    malformed = await client.get(ME_URL)

    for response in (missing, forged, expired, malformed):
        assert response.status_code == 401
        assert response.json() == missing.json()


# ============================================================================
# Logout
# ============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_logout_clears_cookie(client: AsyncClient, method):
    """Test logout expires the session cookie without requiring a session."""
    response = await client.request(method, LOGOUT_URL)

    assert response.status_code == 200
    set_cookie = response.headers["set-cookie"].lower()
    assert set_cookie.startswith(f"{settings.session_cookie_name}=")
    assert "max-age=0" in set_cookie
    assert "path=/" in set_cookie
