"""Physician roster schemas for request/response validation."""

from typing import Literal

from pydantic import BaseModel, Field

Visibility = Literal["active", "inactive"]


# ============================================================================
# Roster
# ============================================================================


class PhysicianView(BaseModel):
    """One physician, merged from all of their specialty assignment rows."""

    employee_code: str
    display_name: str
    specialties: list[str] = Field(default_factory=list)
    visibility: Visibility
    contract_code: str | None = None


class RosterFilters(BaseModel):
    """Optional roster filters."""

    specialties: list[str] | None = None
    visibility: Visibility | None = None
    q: str | None = None


class SpecialtyOption(BaseModel):
    """Entry of the fixed specialty catalogue."""

    code: str
    label: str
    billing_code: str


# ============================================================================
# Mutations
# ============================================================================


class ToggleVisibilityRequest(BaseModel):
    """Toggle bot visibility for a physician."""

    employee_code: str | None = None


class ToggleVisibilityResponse(BaseModel):
    """New aggregate visibility after a toggle."""

    employee_code: str
    visibility: Visibility


class ChangeSpecialtyRequest(BaseModel):
    """Move every assignment row of a physician to a new specialty."""

    employee_code: str | None = None
    specialty_code: str | None = None


class ChangeSpecialtyResponse(BaseModel):
    """Specialty change confirmation."""

    message: str = "Specialty updated"
    employee_code: str
    specialty_code: str
    billing_code: str
    updated_rows: int


class ChangeContractRequest(BaseModel):
    """Assign or clear the insurer contract of a physician."""

    employee_code: str | None = None
    contract_code: str | None = None


class ChangeContractResponse(BaseModel):
    """Normalized contract code after the change; empty means no contract."""

    message: str = "Contract updated"
    employee_code: str
    contract_code: str
