"""Selection state for user/role permission editing sessions."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from threading import RLock
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

from admin_permissions.core.config import get_settings
from admin_permissions.models.permission import PermissionCode, ToggleState
from admin_permissions.services import resolver
from admin_permissions.services.catalog import PermissionCatalog

SelectionObserver = Callable[[FrozenSet[PermissionCode]], None]

LOGGER = logging.getLogger("admin_permissions.services.selection")


class SelectionNotFoundError(Exception):
    """Raised when an edit session does not exist or was already closed."""


class SelectionController:
    """Holds the draft permission set of one open edit form.

    Every change goes through the resolver so cascaded grants and revocations
    are visible to observers, not just the toggled code.
    """

    def __init__(self, catalog: PermissionCatalog, initial: Optional[Iterable[PermissionCode]] = None) -> None:
        self._catalog = catalog
        self._selection: FrozenSet[PermissionCode] = frozenset()
        self._observers: List[SelectionObserver] = []
        if initial is not None:
            self.seed(initial)

    @property
    def catalog(self) -> PermissionCatalog:
        return self._catalog

    def current_selection(self) -> FrozenSet[PermissionCode]:
        return self._selection

    def subscribe(self, observer: SelectionObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def seed(self, codes: Iterable[PermissionCode]) -> FrozenSet[PermissionCode]:
        """Install a subject's existing permissions as-is."""

        selection = frozenset(codes)
        missing = resolver.missing_requirements(self._catalog, selection)
        if missing:
            # Left as-is; the next toggle only repairs around the toggled code.
            LOGGER.warning(
                "selection_seed_inconsistent",
                extra={"missing": {code: sorted(absent) for code, absent in missing.items()}},
            )
        self._replace(selection)
        return selection

    def toggle(self, code: PermissionCode, state: ToggleState | str) -> FrozenSet[PermissionCode]:
        state = ToggleState(state)
        if code not in self._catalog:
            LOGGER.warning("selection_unknown_code", extra={"code": code})

        if state is ToggleState.GRANTED:
            selection = resolver.grant(self._catalog, code, self._selection)
        else:
            selection = resolver.revoke(self._catalog, code, self._selection)

        LOGGER.debug(
            "selection_toggled",
            extra={
                "code": code,
                "state": state.value,
                "added": sorted(selection - self._selection),
                "removed": sorted(self._selection - selection),
            },
        )
        self._replace(selection)
        return selection

    def toggle_module(self, key: str, state: ToggleState | str) -> FrozenSet[PermissionCode]:
        state = ToggleState(state)
        if state is ToggleState.GRANTED:
            selection = resolver.grant_module(self._catalog, key, self._selection)
        else:
            selection = resolver.revoke_module(self._catalog, key, self._selection)

        LOGGER.debug("selection_module_toggled", extra={"module_key": key, "state": state.value})
        self._replace(selection)
        return selection

    def _replace(self, selection: FrozenSet[PermissionCode]) -> None:
        self._selection = selection
        for observer in list(self._observers):
            observer(selection)


class SelectionSessionRegistry:
    """Thread-safe registry of open edit sessions.

    Sessions idle for longer than ``idle_ttl`` seconds are dropped, and once
    ``max_sessions`` are open the least recently used one is evicted to make
    room. Abandoned edit forms therefore never accumulate.
    """

    def __init__(
        self,
        *,
        idle_ttl: Optional[float] = 1800.0,
        max_sessions: Optional[int] = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: OrderedDict[UUID, Tuple[SelectionController, float]] = OrderedDict()
        self._idle_ttl = idle_ttl
        self._max_sessions = max_sessions
        self._clock = clock
        self._lock = RLock()

    def open(
        self, catalog: PermissionCatalog, initial: Optional[Iterable[PermissionCode]] = None
    ) -> tuple[UUID, SelectionController]:
        session_id = uuid4()
        controller = SelectionController(catalog, initial)
        with self._lock:
            now = self._clock()
            self._expire(now)
            while self._max_sessions is not None and len(self._sessions) >= self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                LOGGER.info("selection_session_evicted", extra={"session_id": str(evicted)})
            self._sessions[session_id] = (controller, now)
        LOGGER.info("selection_session_opened", extra={"session_id": str(session_id)})
        return session_id, controller

    def get(self, session_id: UUID) -> SelectionController:
        with self._lock:
            now = self._clock()
            self._expire(now)
            entry = self._sessions.get(session_id)
            if entry is not None:
                controller = entry[0]
                self._sessions[session_id] = (controller, now)
                self._sessions.move_to_end(session_id)
        if entry is None:
            raise SelectionNotFoundError(f"Selection session {session_id} not found")
        return controller

    def close(self, session_id: UUID) -> None:
        with self._lock:
            self._expire(self._clock())
            entry = self._sessions.pop(session_id, None)
        if entry is None:
            raise SelectionNotFoundError(f"Selection session {session_id} not found")
        LOGGER.info("selection_session_closed", extra={"session_id": str(session_id)})

    def _expire(self, now: float) -> None:
        if self._idle_ttl is None:
            return
        # Oldest access first, so expired entries are always at the front.
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if now - last_seen <= self._idle_ttl:
                break
            del self._sessions[session_id]
            LOGGER.info("selection_session_expired", extra={"session_id": str(session_id)})

    def __len__(self) -> int:
        with self._lock:
            self._expire(self._clock())
            return len(self._sessions)


_shared_registry: Optional[SelectionSessionRegistry] = None


def get_selection_registry() -> SelectionSessionRegistry:
    """Return the process-wide edit session registry."""

    global _shared_registry
    if _shared_registry is None:
        settings = get_settings()
        _shared_registry = SelectionSessionRegistry(
            idle_ttl=settings.selection_idle_ttl_seconds,
            max_sessions=settings.max_selection_sessions,
        )
    return _shared_registry


def set_selection_registry(registry: Optional[SelectionSessionRegistry]) -> None:
    """Override the cached registry (primarily for tests)."""

    global _shared_registry
    _shared_registry = registry
