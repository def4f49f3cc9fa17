"""Permission-gated sidebar navigation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from admin_permissions.models.permission import PermissionCode
from admin_permissions.schemas.navigation import (
    NavDropdown,
    NavDropdownConfig,
    NavGroup,
    NavGroupConfig,
    NavItem,
    NavItemConfig,
    NavMaster,
    NavMasterConfig,
    SidebarDocument,
)
from admin_permissions.services.authorization import has_any
from admin_permissions.services.catalog import CatalogConfigurationError, PermissionCatalog

LOGGER = logging.getLogger("admin_permissions.services.navigation")

NavigationItem = Union[NavItem, NavDropdown, NavMaster, NavGroup]


def load_navigation(path: Path, catalog: PermissionCatalog) -> List[NavigationItem]:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        document = SidebarDocument.model_validate(raw)
    except (OSError, ValueError) as exc:
        raise CatalogConfigurationError(f"Unable to load navigation from {path}: {exc}") from exc
    return resolve_navigation(document, catalog)


def resolve_navigation(document: SidebarDocument, catalog: PermissionCatalog) -> List[NavigationItem]:
    return [_resolve(item, catalog) for item in document.navigation]


def _resolve(
    item: Union[NavItemConfig, NavDropdownConfig, NavMasterConfig, NavGroupConfig],
    catalog: PermissionCatalog,
) -> NavigationItem:
    if isinstance(item, NavGroupConfig):
        return NavGroup(label=item.label, children=[_resolve(child, catalog) for child in item.children])

    permissions = catalog.resolve_refs(item.permissions)
    if item.permissions and permissions is None:
        LOGGER.warning("navigation_unresolved_permissions", extra={"id": item.id, "refs": item.permissions})

    if isinstance(item, NavItemConfig):
        return NavItem(id=item.id, label=item.label, icon=item.icon, href=item.href, permissions=permissions)

    children = [_resolve(child, catalog) for child in item.children]
    if permissions is None:
        inherited = sorted({code for child in children for code in (child.permissions or [])})
        permissions = inherited or None

    if isinstance(item, NavDropdownConfig):
        return NavDropdown(id=item.id, label=item.label, icon=item.icon, children=children, permissions=permissions)
    return NavMaster(
        id=item.id,
        label=item.label,
        icon=item.icon,
        href=item.href,
        children=children,
        permissions=permissions,
    )


def is_visible(permissions: Optional[List[PermissionCode]], held: Iterable[PermissionCode]) -> bool:
    """Ungated entries are always shown; gated ones need any of their codes."""

    if permissions is None:
        return True
    return has_any(held, permissions)


def filter_navigation(items: Iterable[NavigationItem], held: Iterable[PermissionCode]) -> List[NavigationItem]:
    held_codes = frozenset(held)
    visible: List[NavigationItem] = []
    for item in items:
        if isinstance(item, NavGroup):
            children = filter_navigation(item.children, held_codes)
            if children:
                visible.append(item.model_copy(update={"children": children}))
            continue

        if not is_visible(item.permissions, held_codes):
            continue

        if isinstance(item, (NavDropdown, NavMaster)):
            children = [child for child in item.children if is_visible(child.permissions, held_codes)]
            if not children:
                continue
            item = item.model_copy(update={"children": children})

        visible.append(item)
    return visible


def first_accessible_href(item: Union[NavDropdown, NavMaster], held: Iterable[PermissionCode]) -> Optional[str]:
    held_codes = frozenset(held)
    for child in item.children:
        if is_visible(child.permissions, held_codes):
            return child.href
    return None


def resolved_href(item: NavigationItem, held: Iterable[PermissionCode]) -> Optional[str]:
    """Items link directly, masters to their first reachable child, others nowhere."""

    if isinstance(item, NavItem):
        return item.href
    if isinstance(item, NavMaster):
        return first_accessible_href(item, held)
    return None
