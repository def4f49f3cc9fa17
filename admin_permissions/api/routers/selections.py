"""Permission editor session endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from admin_permissions.api.dependencies import get_catalog, get_registry
from admin_permissions.schemas.selection import ModuleToggle, SelectionResponse, SelectionSeed, SelectionToggle
from admin_permissions.services import resolver
from admin_permissions.services.catalog import PermissionCatalog
from admin_permissions.services.selection import SelectionController, SelectionSessionRegistry

router = APIRouter()


@router.post(
    "",
    response_model=SelectionResponse,
    status_code=status.HTTP_201_CREATED,
)
def open_selection(
    payload: SelectionSeed,
    catalog: PermissionCatalog = Depends(get_catalog),
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> SelectionResponse:
    session_id, controller = registry.open(catalog, payload.permissions)
    return _to_selection_response(session_id, controller)


@router.get(
    "/{session_id}",
    response_model=SelectionResponse,
)
def get_selection(
    session_id: UUID,
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> SelectionResponse:
    return _to_selection_response(session_id, registry.get(session_id))


@router.put(
    "/{session_id}",
    response_model=SelectionResponse,
)
def reseed_selection(
    session_id: UUID,
    payload: SelectionSeed,
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> SelectionResponse:
    controller = registry.get(session_id)
    controller.seed(payload.permissions)
    return _to_selection_response(session_id, controller)


@router.post(
    "/{session_id}/toggle",
    response_model=SelectionResponse,
)
def toggle_permission(
    session_id: UUID,
    payload: SelectionToggle,
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> SelectionResponse:
    controller = registry.get(session_id)
    controller.toggle(payload.code, payload.state)
    return _to_selection_response(session_id, controller)


@router.post(
    "/{session_id}/toggle-module",
    response_model=SelectionResponse,
)
def toggle_module(
    session_id: UUID,
    payload: ModuleToggle,
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> SelectionResponse:
    controller = registry.get(session_id)
    controller.toggle_module(payload.module, payload.state)
    return _to_selection_response(session_id, controller)


@router.delete(
    "/{session_id}",
)
def close_selection(
    session_id: UUID,
    registry: SelectionSessionRegistry = Depends(get_registry),
) -> dict[str, str]:
    registry.close(session_id)
    return {"status": "closed"}


def _to_selection_response(session_id: UUID, controller: SelectionController) -> SelectionResponse:
    catalog = controller.catalog
    selection = controller.current_selection()
    return SelectionResponse(
        id=session_id,
        permissions=sorted(selection),
        modules={module.key: resolver.module_state(catalog, module.key, selection) for module in catalog.modules()},
        missing_requirements={
            code: sorted(absent) for code, absent in resolver.missing_requirements(catalog, selection).items()
        },
    )
