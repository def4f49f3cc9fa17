"""Held permissions and authorization check endpoints."""

from __future__ import annotations

from typing import FrozenSet

from fastapi import APIRouter, Depends

from admin_permissions.api.dependencies import get_catalog, get_held_store
from admin_permissions.schemas.authorization import (
    AuthorizationRequest,
    AuthorizationResponse,
    GroupedPermission,
    HeldPermissions,
    HeldPermissionsResponse,
)
from admin_permissions.services.authorization import HeldPermissionStore, has, is_permitted
from admin_permissions.services.catalog import PermissionCatalog

router = APIRouter()


@router.get(
    "/session/permissions",
    response_model=HeldPermissionsResponse,
)
def get_held_permissions(
    store: HeldPermissionStore = Depends(get_held_store),
    catalog: PermissionCatalog = Depends(get_catalog),
) -> HeldPermissionsResponse:
    return _to_held_response(store.snapshot(), catalog)


@router.put(
    "/session/permissions",
    response_model=HeldPermissionsResponse,
)
def replace_held_permissions(
    payload: HeldPermissions,
    store: HeldPermissionStore = Depends(get_held_store),
    catalog: PermissionCatalog = Depends(get_catalog),
) -> HeldPermissionsResponse:
    held = store.replace(payload.permissions)
    return _to_held_response(held, catalog)


@router.get(
    "/session/permissions/{code}",
    response_model=AuthorizationResponse,
)
def check_held_permission(
    code: int,
    store: HeldPermissionStore = Depends(get_held_store),
) -> AuthorizationResponse:
    return AuthorizationResponse(authorized=has(store.snapshot(), code))


@router.post(
    "/authorize",
    response_model=AuthorizationResponse,
)
def authorize(
    payload: AuthorizationRequest,
    store: HeldPermissionStore = Depends(get_held_store),
) -> AuthorizationResponse:
    held = store.snapshot() if payload.held is None else frozenset(payload.held)
    return AuthorizationResponse(authorized=is_permitted(held, payload.required, payload.mode))


def _to_held_response(held: FrozenSet[int], catalog: PermissionCatalog) -> HeldPermissionsResponse:
    return HeldPermissionsResponse(
        permissions=sorted(held),
        grouped={
            label: [GroupedPermission(code=definition.code, label=definition.label) for definition in definitions]
            for label, definitions in catalog.group_by_module(held).items()
        },
    )
