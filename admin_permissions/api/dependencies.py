"""Dependency injection helpers for FastAPI routes."""

from __future__ import annotations

from typing import Callable, FrozenSet, List

from fastapi import Depends, Request

from admin_permissions.models.permission import GateMode
from admin_permissions.services.authorization import (
    HeldPermissionStore,
    ensure_permitted,
    get_held_permission_store,
)
from admin_permissions.services.catalog import PermissionCatalog
from admin_permissions.services.navigation import NavigationItem
from admin_permissions.services.selection import SelectionSessionRegistry, get_selection_registry


def get_catalog(request: Request) -> PermissionCatalog:
    return request.app.state.catalog


def get_navigation(request: Request) -> List[NavigationItem]:
    return request.app.state.navigation


def get_registry() -> SelectionSessionRegistry:
    return get_selection_registry()


def get_held_store() -> HeldPermissionStore:
    return get_held_permission_store()


def require_permissions(*codes: int, mode: GateMode = GateMode.ANY) -> Callable[..., FrozenSet[int]]:
    """Build a dependency that rejects the request unless the held set satisfies ``codes``."""

    required = list(codes)

    def dependency(store: HeldPermissionStore = Depends(get_held_store)) -> FrozenSet[int]:
        held = store.snapshot()
        ensure_permitted(held, required, mode)
        return held

    return dependency
