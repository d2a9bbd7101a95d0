"""Physician roster endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from roster_admin.core.specialties import SPECIALTY_BILLING_CODES, SPECIALTY_LABELS
from roster_admin.dependencies import CurrentStaff, DatabaseSession
from roster_admin.schemas.physicians import (
    ChangeContractRequest,
    ChangeContractResponse,
    ChangeSpecialtyRequest,
    ChangeSpecialtyResponse,
    PhysicianView,
    RosterFilters,
    SpecialtyOption,
    ToggleVisibilityRequest,
    ToggleVisibilityResponse,
    Visibility,
)
from roster_admin.services.physician_service import PhysicianService

router = APIRouter()


@router.get(
    "",
    response_model=list[PhysicianView],
    status_code=status.HTTP_200_OK,
    summary="List the physician roster",
)
async def list_physicians(
    db: DatabaseSession,
    staff: CurrentStaff,
    specialty: Annotated[
        list[str] | None,
        Query(description="Restrict to these specialty codes (repeatable)"),
    ] = None,
    visibility: Annotated[
        Visibility | None,
        Query(description="Only physicians with this aggregate bot visibility"),
    ] = None,
    q: Annotated[
        str | None,
        Query(max_length=100, description="Search by name or employee code"),
    ] = None,
) -> list[PhysicianView]:
    """
    List physicians, one entry per employee.

    A physician is active for the bot when any of their specialty rows is
    active. The contract shown prefers the primary row.
    """
    filters = RosterFilters(specialties=specialty, visibility=visibility, q=q)
    return await PhysicianService().list_roster(db, filters)


@router.get(
    "/specialties",
    response_model=list[SpecialtyOption],
    status_code=status.HTTP_200_OK,
    summary="Specialty catalogue",
)
async def list_specialties(staff: CurrentStaff) -> list[SpecialtyOption]:
    """List the specialties a physician can be switched to."""
    return [
        SpecialtyOption(code=code, label=SPECIALTY_LABELS[code], billing_code=billing_code)
        for code, billing_code in SPECIALTY_BILLING_CODES.items()
    ]


@router.post(
    "/toggle-visibility",
    response_model=ToggleVisibilityResponse,
    status_code=status.HTTP_200_OK,
    summary="Toggle bot visibility",
)
async def toggle_visibility(
    request: ToggleVisibilityRequest,
    db: DatabaseSession,
    staff: CurrentStaff,
) -> ToggleVisibilityResponse:
    """Flip a physician's bot visibility on every one of their rows."""
    visibility = await PhysicianService().toggle_visibility(db, request.employee_code)
    return ToggleVisibilityResponse(
        employee_code=(request.employee_code or "").strip(),
        visibility=visibility,
    )


@router.post(
    "/change-specialty",
    response_model=ChangeSpecialtyResponse,
    status_code=status.HTTP_200_OK,
    summary="Change physician specialty",
)
async def change_specialty(
    request: ChangeSpecialtyRequest,
    db: DatabaseSession,
    staff: CurrentStaff,
) -> ChangeSpecialtyResponse:
    """Set a new specialty, and its billing code, on every row of a physician."""
    return await PhysicianService().change_specialty(
        db, request.employee_code, request.specialty_code
    )


@router.post(
    "/change-contract",
    response_model=ChangeContractResponse,
    status_code=status.HTTP_200_OK,
    summary="Change physician insurer contract",
)
async def change_contract(
    request: ChangeContractRequest,
    db: DatabaseSession,
    staff: CurrentStaff,
) -> ChangeContractResponse:
    """Assign or clear (empty code) the insurer contract of a physician."""
    contract_code = await PhysicianService().change_contract(
        db, request.employee_code, request.contract_code
    )
    return ChangeContractResponse(
        employee_code=(request.employee_code or "").strip(),
        contract_code=contract_code,
    )
