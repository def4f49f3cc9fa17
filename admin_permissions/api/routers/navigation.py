"""Sidebar navigation endpoint."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from admin_permissions.api.dependencies import get_held_store, get_navigation
from admin_permissions.schemas.navigation import NavigationEntry, NavigationResponse
from admin_permissions.services.authorization import HeldPermissionStore
from admin_permissions.services.navigation import NavigationItem, filter_navigation, resolved_href

router = APIRouter()


@router.get(
    "",
    response_model=NavigationResponse,
)
def get_visible_navigation(
    navigation: List[NavigationItem] = Depends(get_navigation),
    store: HeldPermissionStore = Depends(get_held_store),
) -> NavigationResponse:
    held = store.snapshot()
    return NavigationResponse(
        navigation=[
            NavigationEntry(item=item, href=resolved_href(item, held))
            for item in filter_navigation(navigation, held)
        ]
    )
