"""Permission editor session schemas."""

from __future__ import annotations

from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel, Field

from admin_permissions.models.permission import ModuleSelectionState, ToggleState


class SelectionSeed(BaseModel):
    permissions: List[int] = Field(default_factory=list, description="Codes the subject already holds.")


class SelectionToggle(BaseModel):
    code: int = Field(..., gt=0)
    state: ToggleState


class ModuleToggle(BaseModel):
    module: str = Field(..., min_length=1)
    state: ToggleState


class SelectionResponse(BaseModel):
    id: UUID
    permissions: List[int]
    modules: Dict[str, ModuleSelectionState]
    missing_requirements: Dict[int, List[int]] = Field(default_factory=dict)
