"""Insurer option endpoints."""

from fastapi import APIRouter, status

from roster_admin.dependencies import Cache, CurrentStaff, DatabaseSession
from roster_admin.schemas.insurers import InsurerOption
from roster_admin.services.insurer_service import InsurerService

router = APIRouter()


@router.get(
    "",
    response_model=list[InsurerOption],
    status_code=status.HTTP_200_OK,
    summary="List insurer options",
)
async def list_insurers(
    db: DatabaseSession,
    staff: CurrentStaff,
    cache: Cache,
) -> list[InsurerOption]:
    """List insurers for the contract selector, ordered by label."""
    options = await InsurerService(cache).list_insurers(db)
    return [InsurerOption(**option) for option in options]
