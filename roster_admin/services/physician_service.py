"""Physician roster service: roster reads and bulk state mutations."""

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster_admin.core.exceptions import (
    NotFoundException,
    StorageException,
    ValidationException,
)
from roster_admin.core.specialties import (
    ACTIVE,
    INACTIVE,
    billing_code_for,
    is_active_flag,
    is_valid_contract_code,
    normalize_contract_code,
    storage_value,
)
from roster_admin.models.specialty_assignments import specialty_assignments
from roster_admin.models.staff_users import staff_users
from roster_admin.schemas.physicians import (
    ChangeSpecialtyResponse,
    PhysicianView,
    RosterFilters,
)
from roster_admin.services.roster import filter_roster, fold_roster

logger = structlog.get_logger()

PHYSICIAN_NOT_FOUND = "Physician not found or has no specialties"


def _require(value: str | None, message: str) -> str:
    """Return a stripped required field or raise a 400."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(message)
    return cleaned


class PhysicianService:
    """Service for physician roster operations.

    Every mutation is a single bulk UPDATE over all rows sharing an employee
    code. There is no row locking, so two concurrent toggles on the same
    physician can interleave.
    """

    async def list_roster(
        self,
        db: AsyncSession,
        filters: RosterFilters | None = None,
    ) -> list[PhysicianView]:
        """Read assignment rows and fold them into one entry per physician."""
        filters = filters or RosterFilters()

        # Outer join: a NULL display name marks a row without a staff record
        query = (
            select(
                specialty_assignments.c.employee_code,
                specialty_assignments.c.specialty_code,
                specialty_assignments.c.visibility,
                specialty_assignments.c.contract_code,
                specialty_assignments.c.is_primary,
                staff_users.c.display_name,
            )
            .select_from(
                specialty_assignments.outerjoin(
                    staff_users,
                    staff_users.c.employee_code == specialty_assignments.c.employee_code,
                )
            )
            .order_by(
                specialty_assignments.c.is_primary.desc(),
                specialty_assignments.c.id.asc(),
            )
        )

        if filters.specialties:
            query = query.where(specialty_assignments.c.specialty_code.in_(filters.specialties))

        try:
            result = await db.execute(query)
            rows = [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error("roster_read_failed", error=str(e), exc_info=True)
            raise StorageException() from e

        staff_names = {
            row["employee_code"]: row["display_name"]
            for row in rows
            if row["display_name"] is not None
        }
        roster = fold_roster(rows, staff_names)
        return filter_roster(roster, visibility=filters.visibility, q=filters.q)

    async def toggle_visibility(self, db: AsyncSession, employee_code: str | None) -> str:
        """
        Flip the aggregate bot visibility of a physician.

        The new value is written to every row, so rows that disagreed before
        end up with the same value.

        Args:
            db: Database session
            employee_code: Physician employee code

        Returns:
            The new aggregate visibility

        Raises:
            ValidationException: If the employee code is missing
            NotFoundException: If the physician has no assignment rows
        """
        employee_code = _require(employee_code, "Missing employee code")

        try:
            result = await db.execute(
                select(specialty_assignments.c.visibility).where(
                    specialty_assignments.c.employee_code == employee_code
                )
            )
            flags = list(result.scalars().all())

            if not flags:
                raise NotFoundException(PHYSICIAN_NOT_FOUND)

            currently_active = any(is_active_flag(flag) for flag in flags)
            new_active = not currently_active

            await db.execute(
                update(specialty_assignments)
                .where(specialty_assignments.c.employee_code == employee_code)
                .values(visibility=storage_value(new_active))
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "physician_visibility_toggle_failed",
                employee_code=employee_code,
                error=str(e),
                exc_info=True,
            )
            raise StorageException() from e

        new_visibility = ACTIVE if new_active else INACTIVE
        logger.info(
            "physician_visibility_toggled",
            employee_code=employee_code,
            visibility=new_visibility,
            rows=len(flags),
        )
        return new_visibility

    async def change_specialty(
        self,
        db: AsyncSession,
        employee_code: str | None,
        specialty_code: str | None,
    ) -> ChangeSpecialtyResponse:
        """Set the specialty and its billing code on every row of a physician."""
        employee_code = _require(employee_code, "Missing parameters")
        specialty_code = _require(specialty_code, "Missing parameters")

        billing_code = billing_code_for(specialty_code)
        if billing_code is None:
            raise ValidationException("Invalid specialty code")

        updated = await self._bulk_update(
            db,
            employee_code,
            "physician_specialty_change_failed",
            specialty_code=specialty_code,
            billing_code=billing_code,
        )

        logger.info(
            "physician_specialty_changed",
            employee_code=employee_code,
            specialty_code=specialty_code,
            billing_code=billing_code,
            rows=updated,
        )
        return ChangeSpecialtyResponse(
            employee_code=employee_code,
            specialty_code=specialty_code,
            billing_code=billing_code,
            updated_rows=updated,
        )

    async def change_contract(
        self,
        db: AsyncSession,
        employee_code: str | None,
        contract_code: str | None,
    ) -> str:
        """
        Assign an insurer contract code to every row of a physician.

        The code is trimmed and upper-cased. An empty code clears the
        contract.

        Returns:
            The normalized code, empty when cleared
        """
        employee_code = _require(employee_code, "Missing employee code")

        normalized = normalize_contract_code(contract_code)
        if normalized and not is_valid_contract_code(normalized):
            raise ValidationException("Invalid contract code")

        updated = await self._bulk_update(
            db,
            employee_code,
            "physician_contract_change_failed",
            contract_code=normalized or None,
        )

        logger.info(
            "physician_contract_changed",
            employee_code=employee_code,
            contract_code=normalized or None,
            rows=updated,
        )
        return normalized

    async def _bulk_update(
        self,
        db: AsyncSession,
        employee_code: str,
        failure_event: str,
        **values: str | None,
    ) -> int:
        """Update all rows of a physician; zero matched rows is a 404."""
        try:
            result = await db.execute(
                update(specialty_assignments)
                .where(specialty_assignments.c.employee_code == employee_code)
                .values(**values)
            )
            updated = result.rowcount or 0

            if updated == 0:
                await db.rollback()
                raise NotFoundException(PHYSICIAN_NOT_FOUND)

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(failure_event, employee_code=employee_code, error=str(e), exc_info=True)
            raise StorageException() from e

        return updated
