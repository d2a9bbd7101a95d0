"""Liveness and readiness endpoints for the roster admin API."""

from typing import Literal

import structlog
from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import literal, select
from sqlalchemy.exc import SQLAlchemyError

from roster_admin.config import settings
from roster_admin.dependencies import Cache, DatabaseSession
from roster_admin.models import insurers, specialty_assignments, staff_users

logger = structlog.get_logger()

router = APIRouter()

# Tables every roster and insurer request reads from
REQUIRED_TABLES = (staff_users, specialty_assignments, insurers)

CacheState = Literal["active", "disabled", "unreachable"]


class LivenessResponse(BaseModel):
    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Which tables answer a query and what the insurer cache is doing."""

    status: Literal["ready", "degraded", "unavailable"]
    version: str
    tables: dict[str, bool]
    insurer_cache: CacheState


@router.get(
    "/health",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
)
async def health_check() -> LivenessResponse:
    """The process is up and serving requests."""
    return LivenessResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
)
async def readiness_check(
    response: Response,
    db: DatabaseSession,
    cache: Cache,
) -> ReadinessResponse:
    """
    Probe each roster table and the insurer cache.

    A missing or unreachable table makes the service unavailable (503). The
    cache only speeds up the insurer list, so losing it degrades the status
    without failing the check.
    """
    tables: dict[str, bool] = {}
    for table in REQUIRED_TABLES:
        try:
            await db.execute(select(literal(1)).select_from(table).limit(1))
            tables[table.name] = True
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning("readiness_table_unreachable", table=table.name, error=str(e))
            tables[table.name] = False

    if cache is None:
        insurer_cache: CacheState = "disabled"
    elif cache.ping():
        insurer_cache = "active"
    else:
        insurer_cache = "unreachable"

    if not all(tables.values()):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        overall = "unavailable"
    elif insurer_cache == "unreachable":
        overall = "degraded"
    else:
        overall = "ready"

    return ReadinessResponse(
        status=overall,
        version=settings.app_version,
        tables=tables,
        insurer_cache=insurer_cache,
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    summary="Simple ping",
)
async def ping() -> dict[str, str]:
    return {"message": "pong"}
