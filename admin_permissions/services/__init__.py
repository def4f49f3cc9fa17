"""Permission catalog, resolution and evaluation services."""

from admin_permissions.services.catalog import PermissionCatalog, load_catalog  # noqa: F401
from admin_permissions.services.selection import SelectionController  # noqa: F401
