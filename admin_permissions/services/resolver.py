"""Dependency resolution for permission selections.

Granting a code pulls in everything it transitively requires; revoking a code
drops every selected code that transitively requires it. Applied to a
consistent selection, both keep every selected code's prerequisites selected.
All functions are pure and return new frozensets.
"""

from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Iterable, Set

from admin_permissions.models.permission import ModuleSelectionState, PermissionCode
from admin_permissions.services.catalog import PermissionCatalog

Selection = FrozenSet[PermissionCode]


def _reachable(start: Iterable[PermissionCode], edges: Callable[[PermissionCode], Iterable[PermissionCode]]) -> Selection:
    seen: Set[PermissionCode] = set()
    pending = list(start)
    while pending:
        code = pending.pop()
        if code in seen:
            continue
        seen.add(code)
        pending.extend(edges(code))
    return frozenset(seen)


def requirement_closure(catalog: PermissionCatalog, code: PermissionCode) -> Selection:
    """Every code ``code`` transitively requires, excluding itself."""

    return _reachable(catalog.requirements_of(code), catalog.requirements_of)


def dependent_closure(catalog: PermissionCatalog, code: PermissionCode) -> Selection:
    """Every code that transitively requires ``code``, excluding itself."""

    return _reachable(catalog.dependents_of(code), catalog.dependents_of)


def grant(catalog: PermissionCatalog, code: PermissionCode, selection: Iterable[PermissionCode]) -> Selection:
    current = frozenset(selection)
    if code in current:
        return current
    return current | {code} | requirement_closure(catalog, code)


def revoke(catalog: PermissionCatalog, code: PermissionCode, selection: Iterable[PermissionCode]) -> Selection:
    current = frozenset(selection)
    if code not in current:
        return current
    return current - ({code} | (dependent_closure(catalog, code) & current))


def grant_module(catalog: PermissionCatalog, key: str, selection: Iterable[PermissionCode]) -> Selection:
    current = frozenset(selection)
    for code in catalog.module(key).codes:
        current = grant(catalog, code, current)
    return current


def revoke_module(catalog: PermissionCatalog, key: str, selection: Iterable[PermissionCode]) -> Selection:
    current = frozenset(selection)
    for code in catalog.module(key).codes:
        current = revoke(catalog, code, current)
    return current


def module_state(catalog: PermissionCatalog, key: str, selection: Iterable[PermissionCode]) -> ModuleSelectionState:
    codes = catalog.module(key).codes
    current = frozenset(selection)
    selected = sum(1 for code in codes if code in current)
    if codes and selected == len(codes):
        return ModuleSelectionState.ALL
    if selected:
        return ModuleSelectionState.PARTIAL
    return ModuleSelectionState.NONE


def missing_requirements(
    catalog: PermissionCatalog, selection: Iterable[PermissionCode]
) -> Dict[PermissionCode, FrozenSet[PermissionCode]]:
    """Selected codes whose direct prerequisites are not selected."""

    current = frozenset(selection)
    missing: Dict[PermissionCode, FrozenSet[PermissionCode]] = {}
    for code in sorted(current):
        absent = catalog.requirements_of(code) - current
        if absent:
            missing[code] = absent
    return missing
