"""Fold per-specialty assignment rows into per-physician roster entries.

Storage keeps one row per (employee, specialty) while the panel shows one
entry per employee. The fold here is pure: it takes rows and a name lookup
and does no I/O, so it can be exercised with plain in-memory data.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from roster_admin.core.specialties import ACTIVE, INACTIVE, is_active_flag
from roster_admin.schemas.physicians import PhysicianView

logger = structlog.get_logger()


@dataclass
class _Group:
    employee_code: str
    specialties: list[str] = field(default_factory=list)
    active: bool = False
    primary_contract: str | None = None
    first_contract: str | None = None

    def add(self, row: Mapping[str, Any]) -> None:
        self.specialties.append(row["specialty_code"])

        # Visible to the bot if any of the rows is visible
        if is_active_flag(row.get("visibility")):
            self.active = True

        contract = (row.get("contract_code") or "").strip()
        if not contract:
            return
        if row.get("is_primary") and self.primary_contract is None:
            self.primary_contract = contract
        if self.first_contract is None:
            self.first_contract = contract

    @property
    def contract_code(self) -> str | None:
        return self.primary_contract or self.first_contract


def fold_roster(
    rows: Iterable[Mapping[str, Any]],
    staff_names: Mapping[str, str],
) -> list[PhysicianView]:
    """
    Merge assignment rows into one view per physician.

    Groups keep the order in which their employee code is first seen.
    Specialties are concatenated in row order without de-duplication.
    Groups with no staff record are dropped.

    Args:
        rows: Assignment rows with employee_code, specialty_code, visibility,
            contract_code and optionally is_primary
        staff_names: Display name per employee code

    Returns:
        Roster entries
    """
    groups: dict[str, _Group] = {}

    for row in rows:
        employee_code = row["employee_code"]
        group = groups.get(employee_code)
        if group is None:
            group = groups[employee_code] = _Group(employee_code=employee_code)
        group.add(row)

    roster: list[PhysicianView] = []
    for employee_code, group in groups.items():
        display_name = staff_names.get(employee_code)
        if display_name is None:
            logger.warning(
                "physician_without_staff_record",
                employee_code=employee_code,
                rows=len(group.specialties),
            )
            continue

        roster.append(
            PhysicianView(
                employee_code=employee_code,
                display_name=display_name,
                specialties=group.specialties,
                visibility=ACTIVE if group.active else INACTIVE,
                contract_code=group.contract_code,
            )
        )

    return roster


def filter_roster(
    roster: Iterable[PhysicianView],
    visibility: str | None = None,
    q: str | None = None,
) -> list[PhysicianView]:
    """Apply aggregate-level filters after folding."""
    needle = (q or "").strip().casefold()

    return [
        physician
        for physician in roster
        if (visibility is None or physician.visibility == visibility)
        and (
            not needle
            or needle in physician.display_name.casefold()
            or needle in physician.employee_code.casefold()
        )
    ]
