"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import admin, auth, centers, citizens, health

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(centers.router, tags=["Centers"])
api_router.include_router(citizens.router, tags=["Citizens"])
api_router.include_router(admin.router, tags=["Admin"])
