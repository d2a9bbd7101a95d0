"""Authentication endpoints."""

from fastapi import APIRouter, Response, status

from roster_admin.config import settings
from roster_admin.dependencies import CurrentStaff, DatabaseSession
from roster_admin.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, StaffIdentity
from roster_admin.services.auth_service import AuthService

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HttpOnly, same-site cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_token_expire_seconds,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.session_cookie_secure,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Staff login",
)
async def login(
    response: Response,
    db: DatabaseSession,
    payload: LoginRequest | None = None,
) -> LoginResponse:
    """
    Validate staff credentials and start a session.

    On success the signed session token is set in the ``token`` cookie; it is
    never returned in the body.

    Raises:
        ValidationException: If a credential is missing (400)
        UnauthorizedException: If the credentials are invalid (401)
    """
    payload = payload or LoginRequest()
    staff, token = await AuthService().login(db, payload.employee_code, payload.password)
    set_session_cookie(response, token)
    return LoginResponse(staff=staff)


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Clear the session cookie",
)
async def logout(response: Response) -> LogoutResponse:
    """
    Log out by clearing the session cookie.

    Sessions are stateless, so a copied token stays valid until it expires.
    """
    clear_session_cookie(response)
    return LogoutResponse()


@router.get(
    "/me",
    response_model=StaffIdentity,
    status_code=status.HTTP_200_OK,
    summary="Current staff member",
)
async def me(staff: CurrentStaff) -> StaffIdentity:
    """Return the identity carried by the session cookie."""
    return staff
