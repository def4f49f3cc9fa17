"""Authorization endpoint schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from admin_permissions.models.permission import GateMode


class AuthorizationRequest(BaseModel):
    required: List[int] = Field(default_factory=list)
    mode: GateMode = GateMode.ANY
    held: Optional[List[int]] = Field(
        default=None,
        description="Explicit held codes; the current session's set is used when omitted.",
    )


class AuthorizationResponse(BaseModel):
    authorized: bool


class HeldPermissions(BaseModel):
    permissions: List[int] = Field(default_factory=list)


class GroupedPermission(BaseModel):
    code: int
    label: str


class HeldPermissionsResponse(HeldPermissions):
    grouped: Dict[str, List[GroupedPermission]] = Field(default_factory=dict)
