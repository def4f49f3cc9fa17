"""Immutable permission catalog and its loader."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from admin_permissions.models.permission import PermissionCode, PermissionDefinition, PermissionModule
from admin_permissions.schemas.catalog import ByCodeEntry, CatalogDocument

LOGGER = logging.getLogger("admin_permissions.services.catalog")

_UNVISITED, _VISITING, _DONE = 0, 1, 2


class CatalogConfigurationError(Exception):
    """Raised when the static permission configuration is malformed."""


class CyclicRequirementError(CatalogConfigurationError):
    """Raised when a permission transitively requires itself."""

    def __init__(self, cycle: Sequence[PermissionCode]) -> None:
        self.cycle = tuple(cycle)
        path = " -> ".join(str(code) for code in self.cycle)
        super().__init__(f"Cyclic permission requirements: {path}")


class UnknownModuleError(Exception):
    """Raised when a module key is not part of the catalog."""


class PermissionCatalog:
    """Read-only view of every permission code, grouped by module.

    The requires graph is validated once here; a reverse adjacency of direct
    dependents is precomputed so revocation never rescans the catalog.
    """

    def __init__(self, modules: Iterable[PermissionModule]) -> None:
        self._modules: Dict[str, PermissionModule] = {}
        self._by_code: Dict[PermissionCode, PermissionDefinition] = {}
        self._by_ref: Dict[str, PermissionCode] = {}

        for module in modules:
            if module.key in self._modules:
                raise CatalogConfigurationError(f"Duplicate permission module '{module.key}'")
            for definition in module.permissions:
                self._register(module, definition)
            self._modules[module.key] = module

        self._check_acyclic()

        dependents: Dict[PermissionCode, Set[PermissionCode]] = {}
        unknown: Dict[PermissionCode, FrozenSet[PermissionCode]] = {}
        for definition in self._by_code.values():
            for required in definition.requires:
                dependents.setdefault(required, set()).add(definition.code)
            missing = frozenset(code for code in definition.requires if code not in self._by_code)
            if missing:
                unknown[definition.code] = missing
        self._dependents = {code: frozenset(codes) for code, codes in dependents.items()}
        self._unknown = unknown

        for code, missing in sorted(unknown.items()):
            LOGGER.warning(
                "catalog_unknown_requirement",
                extra={"code": code, "missing": sorted(missing)},
            )

    @classmethod
    def from_document(cls, document: CatalogDocument) -> "PermissionCatalog":
        modules: List[PermissionModule] = []
        for key, module_entry in document.modules.items():
            definitions = tuple(
                PermissionDefinition(
                    code=entry.code,
                    module=key,
                    action=entry.action,
                    label=entry.label,
                    requires=frozenset(entry.requires),
                )
                for entry in module_entry.permissions.values()
            )
            modules.append(PermissionModule(key=key, label=module_entry.label, permissions=definitions))

        catalog = cls(modules)
        if document.by_code is not None:
            catalog._check_by_code(document.by_code)
        return catalog

    def lookup(self, code: PermissionCode) -> Optional[PermissionDefinition]:
        return self._by_code.get(code)

    def all_definitions(self) -> List[PermissionDefinition]:
        return [definition for module in self._modules.values() for definition in module.permissions]

    def modules(self) -> Tuple[PermissionModule, ...]:
        return tuple(self._modules.values())

    def module(self, key: str) -> PermissionModule:
        module = self._modules.get(key)
        if module is None:
            raise UnknownModuleError(f"Permission module '{key}' not found")
        return module

    def codes(self) -> FrozenSet[PermissionCode]:
        return frozenset(self._by_code)

    def requirements_of(self, code: PermissionCode) -> FrozenSet[PermissionCode]:
        definition = self._by_code.get(code)
        return definition.requires if definition else frozenset()

    def dependents_of(self, code: PermissionCode) -> FrozenSet[PermissionCode]:
        return self._dependents.get(code, frozenset())

    def unknown_references(self) -> Dict[PermissionCode, FrozenSet[PermissionCode]]:
        return dict(self._unknown)

    def resolve_ref(self, ref: str) -> Optional[PermissionCode]:
        """Map a ``MODULE.ACTION`` reference to its code."""

        return self._by_ref.get(ref)

    def resolve_refs(self, refs: Optional[Iterable[str]]) -> Optional[List[PermissionCode]]:
        if not refs:
            return None
        codes = [code for code in (self.resolve_ref(ref) for ref in refs) if code is not None]
        return codes or None

    def group_by_module(self, codes: Iterable[PermissionCode]) -> Dict[str, List[PermissionDefinition]]:
        """Group known codes under their module label, in catalog order."""

        wanted = set(codes)
        grouped: Dict[str, List[PermissionDefinition]] = {}
        for module in self._modules.values():
            members = [definition for definition in module.permissions if definition.code in wanted]
            if members:
                grouped[module.label] = members
        return grouped

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __iter__(self) -> Iterator[PermissionDefinition]:
        return iter(self.all_definitions())

    def __len__(self) -> int:
        return len(self._by_code)

    def _register(self, module: PermissionModule, definition: PermissionDefinition) -> None:
        if definition.code <= 0:
            raise CatalogConfigurationError(f"Permission code {definition.code} must be a positive integer")
        if definition.module != module.key:
            raise CatalogConfigurationError(
                f"Permission {definition.code} declares module '{definition.module}' but is listed under '{module.key}'"
            )
        if definition.code in self._by_code:
            raise CatalogConfigurationError(f"Duplicate permission code {definition.code}")
        if definition.ref in self._by_ref:
            raise CatalogConfigurationError(f"Duplicate permission reference '{definition.ref}'")
        self._by_code[definition.code] = definition
        self._by_ref[definition.ref] = definition.code

    def _check_acyclic(self) -> None:
        state: Dict[PermissionCode, int] = {code: _UNVISITED for code in self._by_code}

        for root in self._by_code:
            if state[root] != _UNVISITED:
                continue
            path: List[PermissionCode] = [root]
            stack: List[Iterator[PermissionCode]] = [iter(sorted(self._by_code[root].requires))]
            state[root] = _VISITING
            while stack:
                child = next(stack[-1], None)
                if child is None:
                    stack.pop()
                    state[path.pop()] = _DONE
                    continue
                child_state = state.get(child)
                if child_state is None or child_state == _DONE:
                    continue
                if child_state == _VISITING:
                    raise CyclicRequirementError(path[path.index(child):] + [child])
                state[child] = _VISITING
                path.append(child)
                stack.append(iter(sorted(self._by_code[child].requires)))

    def _check_by_code(self, by_code: Dict[int, ByCodeEntry]) -> None:
        missing = self.codes() - set(by_code)
        if missing:
            raise CatalogConfigurationError(f"Codes missing from byCode: {sorted(missing)}")
        for code, entry in by_code.items():
            definition = self._by_code.get(code)
            if definition is None:
                raise CatalogConfigurationError(f"byCode entry {code} does not belong to any module")
            if (
                entry.module != definition.module
                or entry.action != definition.action
                or entry.label != definition.label
                or frozenset(entry.requires) != definition.requires
            ):
                raise CatalogConfigurationError(f"byCode entry {code} disagrees with module '{definition.module}'")


def load_catalog(path: Path) -> PermissionCatalog:
    """Read and validate a catalog document; refuses malformed configuration."""

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        document = CatalogDocument.model_validate(raw)
    except (OSError, ValueError) as exc:
        raise CatalogConfigurationError(f"Unable to load permission catalog from {path}: {exc}") from exc

    catalog = PermissionCatalog.from_document(document)
    LOGGER.info(
        "catalog_loaded",
        extra={"path": str(path), "modules": len(catalog.modules()), "permissions": len(catalog)},
    )
    return catalog
