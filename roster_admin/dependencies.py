"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from roster_admin.config import settings
from roster_admin.core.exceptions import UnauthorizedException
from roster_admin.core.redis_client import CacheManager, get_redis_client
from roster_admin.database import get_db
from roster_admin.schemas.auth import StaffIdentity
from roster_admin.services.auth_service import AuthService

# Security
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


async def get_current_staff(
    token: Annotated[str | None, Depends(session_cookie)],
) -> StaffIdentity:
    """
    Resolve the staff identity from the session cookie.

    The token is self-contained, so the database is not consulted. Missing,
    malformed, forged and expired tokens all get the same response.

    Args:
        token: Session cookie value

    Returns:
        Staff identity embedded in the token

    Raises:
        UnauthorizedException: If there is no valid session
    """
    identity = AuthService().validate_session_token(token)

    if identity is None:
        raise UnauthorizedException()

    return identity


def get_cache_manager() -> CacheManager | None:
    """Cache manager backed by the shared Redis client."""
    return CacheManager(get_redis_client())


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentStaff = Annotated[StaffIdentity, Depends(get_current_staff)]
Cache = Annotated[CacheManager | None, Depends(get_cache_manager)]
