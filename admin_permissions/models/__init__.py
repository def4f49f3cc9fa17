"""Immutable permission catalog records."""

from admin_permissions.models.permission import GateMode  # noqa: F401
from admin_permissions.models.permission import ModuleSelectionState  # noqa: F401
from admin_permissions.models.permission import PermissionCode  # noqa: F401
from admin_permissions.models.permission import PermissionDefinition  # noqa: F401
from admin_permissions.models.permission import PermissionModule  # noqa: F401
from admin_permissions.models.permission import ToggleState  # noqa: F401
