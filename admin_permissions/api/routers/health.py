"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from admin_permissions.api.dependencies import get_catalog
from admin_permissions.services.catalog import PermissionCatalog

router = APIRouter()


@router.get("/healthz", summary="Liveness probe")
def health_check(catalog: PermissionCatalog = Depends(get_catalog)) -> dict[str, object]:
    return {"status": "ok", "permissions": len(catalog), "modules": len(catalog.modules())}
