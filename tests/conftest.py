import os
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ADMIN_PERMS_CATALOG_PATH", "")
os.environ.setdefault("ADMIN_PERMS_NAVIGATION_PATH", "")
os.environ.setdefault("ADMIN_PERMS_INITIAL_PERMISSIONS", "")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from admin_permissions.core.config import DEFAULT_CATALOG_PATH, get_settings  # noqa: E402

get_settings.cache_clear()

from admin_permissions.main import create_app  # noqa: E402
from admin_permissions.models.permission import PermissionDefinition, PermissionModule  # noqa: E402
from admin_permissions.services.authorization import HeldPermissionStore, set_held_permission_store  # noqa: E402
from admin_permissions.services.catalog import PermissionCatalog, load_catalog  # noqa: E402
from admin_permissions.services.selection import SelectionSessionRegistry, set_selection_registry  # noqa: E402


@pytest.fixture(autouse=True)
def reset_session_state():
    set_held_permission_store(HeldPermissionStore())
    set_selection_registry(SelectionSessionRegistry())
    yield
    set_held_permission_store(None)
    set_selection_registry(None)


@pytest.fixture()
def client() -> TestClient:  # noqa: ANN001
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def catalog() -> PermissionCatalog:
    return load_catalog(DEFAULT_CATALOG_PATH)


@pytest.fixture()
def make_catalog() -> Callable[..., PermissionCatalog]:
    """Build a single-module catalog from ``{code: [required codes]}``."""

    def _make(requires: Dict[int, List[int]], module: str = "TEST") -> PermissionCatalog:
        definitions = tuple(
            PermissionDefinition(
                code=code,
                module=module,
                action=f"ACTION_{code}",
                label=f"Permission {code}",
                requires=frozenset(required),
            )
            for code, required in requires.items()
        )
        return PermissionCatalog([PermissionModule(key=module, label=module.title(), permissions=definitions)])

    return _make
