"""In-memory permission catalog records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Tuple

PermissionCode = int


class ToggleState(str, Enum):
    GRANTED = "granted"
    REVOKED = "revoked"


class GateMode(str, Enum):
    ANY = "any"
    ALL = "all"


class ModuleSelectionState(str, Enum):
    ALL = "all"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True)
class PermissionDefinition:
    """A single grantable capability and the codes it depends on."""

    code: PermissionCode
    module: str
    action: str
    label: str
    requires: FrozenSet[PermissionCode] = field(default_factory=frozenset)

    @property
    def ref(self) -> str:
        """``MODULE.ACTION`` reference used by navigation configs."""

        return f"{self.module}.{self.action}"


@dataclass(frozen=True)
class PermissionModule:
    """Display grouping of related permission definitions."""

    key: str
    label: str
    permissions: Tuple[PermissionDefinition, ...] = ()

    @property
    def codes(self) -> Tuple[PermissionCode, ...]:
        return tuple(definition.code for definition in self.permissions)
