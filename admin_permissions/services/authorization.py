"""Authorization evaluation against the actor's held permissions."""

from __future__ import annotations

import logging
from threading import RLock
from typing import FrozenSet, Iterable, Optional, Sequence

from admin_permissions.core.config import get_settings
from admin_permissions.models.permission import GateMode, PermissionCode

LOGGER = logging.getLogger("admin_permissions.services.authorization")


class PermissionDeniedError(Exception):
    """Raised when a guarded action is attempted without the required permissions."""

    def __init__(self, required: Sequence[PermissionCode], mode: GateMode) -> None:
        self.required = tuple(required)
        self.mode = mode
        codes = ", ".join(str(code) for code in self.required)
        super().__init__(f"Missing {mode.value} of permissions [{codes}]")


def _required_codes(required: Optional[Iterable[PermissionCode]]) -> Iterable[PermissionCode]:
    return () if required is None else required


def has_any(held: Iterable[PermissionCode], required: Optional[Iterable[PermissionCode]]) -> bool:
    """True when at least one required code is held; an empty or missing requirement is never satisfied."""

    held_codes = held if isinstance(held, (set, frozenset)) else frozenset(held)
    return any(code in held_codes for code in _required_codes(required))


def has_all(held: Iterable[PermissionCode], required: Optional[Iterable[PermissionCode]]) -> bool:
    """True when every required code is held; an empty or missing requirement is vacuously satisfied."""

    held_codes = held if isinstance(held, (set, frozenset)) else frozenset(held)
    return all(code in held_codes for code in _required_codes(required))


def has(held: Iterable[PermissionCode], code: PermissionCode) -> bool:
    return has_all(held, (code,))


def is_permitted(
    held: Iterable[PermissionCode],
    required: Optional[Iterable[PermissionCode]],
    mode: GateMode | str = GateMode.ANY,
) -> bool:
    if GateMode(mode) is GateMode.ALL:
        return has_all(held, required)
    return has_any(held, required)


def ensure_permitted(
    held: Iterable[PermissionCode],
    required: Optional[Sequence[PermissionCode]],
    mode: GateMode | str = GateMode.ANY,
) -> None:
    mode = GateMode(mode)
    required = tuple(_required_codes(required))
    if not is_permitted(held, required, mode):
        LOGGER.info(
            "authorization_denied",
            extra={"required": list(required), "mode": mode},
        )
        raise PermissionDeniedError(required, mode)


class HeldPermissionStore:
    """Current actor's permission codes, replaced wholesale on every refresh."""

    def __init__(self, codes: Optional[Iterable[PermissionCode]] = None) -> None:
        self._held: FrozenSet[PermissionCode] = frozenset(codes or ())
        self._lock = RLock()

    def snapshot(self) -> FrozenSet[PermissionCode]:
        with self._lock:
            return self._held

    def replace(self, codes: Iterable[PermissionCode]) -> FrozenSet[PermissionCode]:
        held = frozenset(codes)
        with self._lock:
            self._held = held
        LOGGER.info("held_permissions_replaced", extra={"count": len(held), "permissions": held})
        return held

    def clear(self) -> None:
        self.replace(())


_shared_store: Optional[HeldPermissionStore] = None


def get_held_permission_store() -> HeldPermissionStore:
    """Return the process-wide held permission store."""

    global _shared_store
    if _shared_store is not None:
        return _shared_store

    _shared_store = HeldPermissionStore(get_settings().initial_permissions)
    return _shared_store


def set_held_permission_store(store: Optional[HeldPermissionStore]) -> None:
    """Override the cached store (primarily for tests)."""

    global _shared_store
    _shared_store = store
