"""API v1 router configuration."""

from fastapi import APIRouter

from roster_admin.api.v1.endpoints import auth, health, insurers, physicians

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(physicians.router, prefix="/physicians", tags=["Physicians"])
api_router.include_router(insurers.router, prefix="/insurers", tags=["Insurers"])
