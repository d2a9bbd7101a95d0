"""Authentication service for staff login and session tokens."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster_admin.core.exceptions import (
    StorageException,
    UnauthorizedException,
    ValidationException,
)
from roster_admin.core.security import (
    create_session_token,
    decode_session_token,
    dummy_verify_password,
    verify_password,
)
from roster_admin.models.staff_users import staff_users
from roster_admin.schemas.auth import StaffIdentity

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication service for staff credentials and session tokens."""

    async def get_staff_by_code(self, db: AsyncSession, employee_code: str) -> dict | None:
        """Fetch a staff record by its unique employee code."""
        query = select(staff_users).where(staff_users.c.employee_code == employee_code)

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("staff_lookup_failed", error=str(e), exc_info=True)
            raise StorageException() from e

        staff = result.mappings().first()
        return dict(staff) if staff else None

    async def login(
        self,
        db: AsyncSession,
        employee_code: str | None,
        password: str | None,
    ) -> tuple[StaffIdentity, str]:
        """
        Validate staff credentials and issue a session token.

        Unknown users and wrong passwords produce the same error, and both
        paths run one password hash verification.

        Args:
            db: Database session
            employee_code: Submitted employee code
            password: Submitted password

        Returns:
            Tuple of (staff identity, session token)

        Raises:
            ValidationException: If either field is missing or blank
            UnauthorizedException: If the credentials do not match
        """
        employee_code = (employee_code or "").strip()
        if not employee_code or not password:
            raise ValidationException("Missing credentials")

        staff = await self.get_staff_by_code(db, employee_code)

        if staff is None:
            dummy_verify_password()
            logger.info("staff_login_failed")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not verify_password(password, staff["password_hash"]):
            logger.info("staff_login_failed")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        identity = StaffIdentity(
            employee_code=staff["employee_code"],
            display_name=staff["display_name"],
        )
        token = create_session_token(identity.employee_code, identity.display_name)

        logger.info("staff_login_succeeded", employee_code=identity.employee_code)
        return identity, token

    def validate_session_token(self, token: str | None) -> StaffIdentity | None:
        """
        Resolve a session token to a staff identity.

        Args:
            token: Raw cookie value

        Returns:
            Staff identity if valid, None otherwise
        """
        if not token:
            return None

        claims = decode_session_token(token)
        if claims is None:
            return None

        return StaffIdentity(employee_code=claims.subject_id, display_name=claims.subject_name)
