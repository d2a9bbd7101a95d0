"""Authentication schemas."""

from pydantic import BaseModel, Field


class SessionClaims(BaseModel):
    """Verified contents of a session token."""

    subject_id: str
    subject_name: str
    issued_at: int
    expires_at: int


class StaffIdentity(BaseModel):
    """Authenticated staff member attached to a request."""

    employee_code: str
    display_name: str


class LoginRequest(BaseModel):
    """Staff login request.

    Both fields are optional at the schema level so that a missing field is
    reported as missing credentials rather than a generic validation error.
    """

    employee_code: str | None = Field(None, description="Staff employee code")
    password: str | None = Field(None, description="Staff password")


class LoginResponse(BaseModel):
    """Login response. The token itself travels only in the cookie."""

    message: str = "Login successful"
    staff: StaffIdentity


class LogoutResponse(BaseModel):
    """Logout response."""

    message: str = "Session closed"
