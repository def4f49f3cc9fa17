from __future__ import annotations

import json
import logging

import pytest

from admin_permissions.core.config import DEFAULT_CATALOG_PATH, AppSettings
from admin_permissions.core.logging import JsonFormatter
from admin_permissions.main import create_app
from admin_permissions.models.permission import ToggleState
from admin_permissions.services.catalog import CatalogConfigurationError
from scripts.validate_catalog import main as validate_catalog


def test_initial_permissions_parsed_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ADMIN_PERMS_INITIAL_PERMISSIONS", "101, 102,201")
    monkeypatch.setenv("ADMIN_PERMS_LOG_LEVEL", "debug")

    settings = AppSettings()

    assert settings.initial_permissions == [101, 102, 201]
    assert settings.log_level == "DEBUG"


def test_empty_paths_fall_back_to_packaged_documents() -> None:
    settings = AppSettings(catalog_path="", navigation_path="")

    assert settings.catalog_path is None
    assert settings.resolved_catalog_path() == DEFAULT_CATALOG_PATH


def test_app_refuses_to_start_with_cyclic_catalog(tmp_path) -> None:
    path = tmp_path / "permissions.json"
    path.write_text(
        json.dumps(
            {
                "modules": {
                    "USER": {
                        "label": "Users",
                        "permissions": {
                            "1": {"code": 1, "action": "READ", "label": "Read", "requires": [1]},
                        },
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    with pytest.raises(CatalogConfigurationError):
        create_app(AppSettings(catalog_path=str(path), log_json=False))


def test_json_formatter_includes_extra_fields() -> None:
    formatter = JsonFormatter("admin-permissions")
    record = logging.LogRecord(
        name="admin_permissions.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="selection_toggled",
        args=(),
        exc_info=None,
    )
    record.code = 101

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "selection_toggled"
    assert payload["service"] == "admin-permissions"
    assert payload["level"] == "INFO"
    assert payload["extra"] == {"code": 101}


def test_json_formatter_renders_code_sets_and_enums() -> None:
    formatter = JsonFormatter("admin-permissions")
    record = logging.LogRecord(
        name="admin_permissions.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="held_permissions_replaced",
        args=(),
        exc_info=None,
    )
    record.permissions = frozenset({305, 99, 101})
    record.state = ToggleState.REVOKED

    payload = json.loads(formatter.format(record))

    assert payload["extra"] == {"permissions": [99, 101, 305], "state": "revoked"}


def test_session_registry_limits_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ADMIN_PERMS_SELECTION_IDLE_TTL_SECONDS", "90")
    monkeypatch.setenv("ADMIN_PERMS_MAX_SELECTION_SESSIONS", "5")

    settings = AppSettings()

    assert settings.selection_idle_ttl_seconds == 90
    assert settings.max_selection_sessions == 5


def test_validate_catalog_cli(tmp_path) -> None:
    assert validate_catalog([]) == 0

    catalog_path = tmp_path / "permissions.json"
    catalog_path.write_text(
        json.dumps(
            {
                "modules": {
                    "USER": {
                        "label": "Users",
                        "permissions": {
                            "1": {"code": 1, "action": "READ", "label": "Read", "requires": [77]},
                        },
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    navigation_path = tmp_path / "sidebar.json"
    navigation_path.write_text('{"navigation": []}', encoding="utf-8")

    args = ["--catalog", str(catalog_path), "--navigation", str(navigation_path)]
    assert validate_catalog(args) == 0
    assert validate_catalog([*args, "--strict"]) == 2

    catalog_path.write_text("[]", encoding="utf-8")
    assert validate_catalog(args) == 1
