"""Schemas for the static permission catalog document."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PermissionEntry(BaseModel):
    code: int = Field(..., gt=0)
    action: str = Field(..., min_length=1, max_length=120)
    label: str = Field(..., min_length=1, max_length=255)
    requires: List[int] = Field(default_factory=list)


class ByCodeEntry(BaseModel):
    module: str
    action: str
    label: str
    requires: List[int] = Field(default_factory=list)


class ModuleEntry(BaseModel):
    label: str = Field(..., min_length=1, max_length=255)
    permissions: Dict[str, PermissionEntry] = Field(default_factory=dict)


class CatalogDocument(BaseModel):
    """Raw ``modules`` + ``byCode`` document as shipped with the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    modules: Dict[str, ModuleEntry]
    by_code: Optional[Dict[int, ByCodeEntry]] = Field(default=None, alias="byCode")


class PermissionResponse(BaseModel):
    code: int
    module: str
    action: str
    label: str
    requires: List[int]


class ModuleResponse(BaseModel):
    key: str
    label: str
    permissions: List[PermissionResponse]


class CatalogResponse(BaseModel):
    modules: List[ModuleResponse]
