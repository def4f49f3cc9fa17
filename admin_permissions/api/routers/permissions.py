"""Permission catalog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from admin_permissions.api.dependencies import get_catalog
from admin_permissions.models.permission import PermissionDefinition
from admin_permissions.schemas.catalog import CatalogResponse, ModuleResponse, PermissionResponse
from admin_permissions.services.catalog import PermissionCatalog

router = APIRouter()


@router.get(
    "/catalog",
    response_model=CatalogResponse,
)
def get_permission_catalog(catalog: PermissionCatalog = Depends(get_catalog)) -> CatalogResponse:
    return CatalogResponse(
        modules=[
            ModuleResponse(
                key=module.key,
                label=module.label,
                permissions=[to_permission_response(definition) for definition in module.permissions],
            )
            for module in catalog.modules()
        ]
    )


@router.get(
    "/{code}",
    response_model=PermissionResponse,
)
def get_permission(code: int, catalog: PermissionCatalog = Depends(get_catalog)) -> PermissionResponse:
    definition = catalog.lookup(code)
    if definition is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Permission {code} not found")
    return to_permission_response(definition)


def to_permission_response(definition: PermissionDefinition) -> PermissionResponse:
    return PermissionResponse(
        code=definition.code,
        module=definition.module,
        action=definition.action,
        label=definition.label,
        requires=sorted(definition.requires),
    )
