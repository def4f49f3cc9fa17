"""Router registrations."""

from fastapi import APIRouter

from admin_permissions.api.routers import (
    authorization,
    health,
    navigation,
    permissions,
    selections,
)


def get_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(health.router, tags=["health"])
    router.include_router(permissions.router, prefix="/api/v1/permissions", tags=["permissions"])
    router.include_router(selections.router, prefix="/api/v1/selections", tags=["selections"])
    router.include_router(authorization.router, prefix="/api/v1", tags=["authorization"])
    router.include_router(navigation.router, prefix="/api/v1/navigation", tags=["navigation"])
    return router
