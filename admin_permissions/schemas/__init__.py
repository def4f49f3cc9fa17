"""Pydantic schemas for API payloads."""

from admin_permissions.schemas.authorization import (
    AuthorizationRequest,
    AuthorizationResponse,
    HeldPermissions,
    HeldPermissionsResponse,
)
from admin_permissions.schemas.catalog import CatalogDocument, CatalogResponse, PermissionResponse
from admin_permissions.schemas.navigation import NavigationResponse, SidebarDocument
from admin_permissions.schemas.selection import ModuleToggle, SelectionResponse, SelectionSeed, SelectionToggle

__all__ = [
    "AuthorizationRequest",
    "AuthorizationResponse",
    "CatalogDocument",
    "CatalogResponse",
    "HeldPermissions",
    "HeldPermissionsResponse",
    "ModuleToggle",
    "NavigationResponse",
    "PermissionResponse",
    "SelectionResponse",
    "SelectionSeed",
    "SelectionToggle",
    "SidebarDocument",
]
