from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from admin_permissions.api.dependencies import require_permissions
from admin_permissions.api.error_handlers import register_exception_handlers
from admin_permissions.models.permission import GateMode
from admin_permissions.services.authorization import (
    HeldPermissionStore,
    PermissionDeniedError,
    ensure_permitted,
    get_held_permission_store,
    has,
    has_all,
    has_any,
    is_permitted,
)


def test_any_and_all_against_held_set() -> None:
    held = {5, 6}

    assert has_any(held, [6, 7]) is True
    assert has_all(held, [6, 7]) is False
    assert has_all(held, [5, 6]) is True
    assert has_any(held, [7, 8]) is False


@pytest.mark.parametrize("held", [set(), {1}, {1, 2, 3}])
def test_empty_requirement_boundaries(held: set) -> None:
    assert has_any(held, []) is False
    assert has_all(held, []) is True


def test_missing_requirement_list_is_treated_as_empty() -> None:
    assert has_any({1}, None) is False
    assert has_all({1}, None) is True
    assert is_permitted({1}, None, GateMode.ANY) is False
    assert is_permitted({1}, None, GateMode.ALL) is True
    ensure_permitted({1}, None, GateMode.ALL)


def test_has_is_single_code_membership() -> None:
    assert has([101, 102], 101) is True
    assert has([101, 102], 103) is False
    assert has(frozenset(), 101) is False


def test_predicates_accept_any_iterables() -> None:
    assert has_any((code for code in [1, 2]), iter([2])) is True
    assert has_all([1, 2, 2], (1, 2)) is True


def test_is_permitted_dispatches_on_mode() -> None:
    held = frozenset({101, 102})

    assert is_permitted(held, [101, 999]) is True
    assert is_permitted(held, [101, 999], GateMode.ALL) is False
    assert is_permitted(held, [], GateMode.ANY) is False
    assert is_permitted(held, [], GateMode.ALL) is True


def test_mode_given_as_string_value() -> None:
    assert is_permitted({1}, [1, 2], "all") is False
    assert is_permitted({1}, [1, 2], "any") is True

    with pytest.raises(PermissionDeniedError) as excinfo:
        ensure_permitted({1}, [1, 2], "all")
    assert excinfo.value.mode is GateMode.ALL

    with pytest.raises(ValueError):
        is_permitted({1}, [1], "most")


def test_ensure_permitted_raises_for_denied_action() -> None:
    ensure_permitted({101}, [101])

    with pytest.raises(PermissionDeniedError) as excinfo:
        ensure_permitted({101}, [101, 104], GateMode.ALL)

    assert excinfo.value.required == (101, 104)
    assert excinfo.value.mode is GateMode.ALL


def test_held_store_replaces_wholesale() -> None:
    store = HeldPermissionStore([101, 102])
    before = store.snapshot()

    store.replace([201])

    assert before == frozenset({101, 102})
    assert store.snapshot() == frozenset({201})

    store.clear()
    assert store.snapshot() == frozenset()


def test_guarded_route_uses_held_permissions() -> None:
    app = FastAPI()
    register_exception_handlers(app)

    @app.delete("/users/{user_id}")
    def delete_user(user_id: int, held=Depends(require_permissions(102, 104, mode=GateMode.ALL))):  # noqa: ANN001
        return {"deleted": user_id, "held": sorted(held)}

    client = TestClient(app)
    store = get_held_permission_store()

    store.replace([102])
    denied = client.delete("/users/7")
    assert denied.status_code == 403
    assert denied.json()["required"] == [102, 104]
    assert denied.json()["mode"] == "all"

    store.replace([102, 104])
    allowed = client.delete("/users/7")
    assert allowed.status_code == 200
    assert allowed.json() == {"deleted": 7, "held": [102, 104]}


def test_session_permissions_roundtrip(client: TestClient) -> None:
    empty = client.get("/api/v1/session/permissions")
    empty.raise_for_status()
    assert empty.json() == {"permissions": [], "grouped": {}}

    replaced = client.put("/api/v1/session/permissions", json={"permissions": [102, 101, 201, 999]})
    replaced.raise_for_status()
    body = replaced.json()
    assert body["permissions"] == [101, 102, 201, 999]
    assert list(body["grouped"]) == ["Dashboard", "User Management"]
    assert body["grouped"]["User Management"] == [
        {"code": 101, "label": "Create Users"},
        {"code": 102, "label": "View Users"},
    ]

    assert client.get("/api/v1/session/permissions/101").json() == {"authorized": True}
    assert client.get("/api/v1/session/permissions/104").json() == {"authorized": False}


def test_authorize_endpoint_uses_mode_and_held_set(client: TestClient) -> None:
    client.put("/api/v1/session/permissions", json={"permissions": [5, 6]}).raise_for_status()

    def authorize(payload: dict) -> bool:
        response = client.post("/api/v1/authorize", json=payload)
        response.raise_for_status()
        return response.json()["authorized"]

    assert authorize({"required": [6, 7]}) is True
    assert authorize({"required": [6, 7], "mode": "all"}) is False
    assert authorize({"required": [5, 6], "mode": "all"}) is True
    assert authorize({"required": []}) is False
    assert authorize({"required": [], "mode": "all"}) is True
    assert authorize({"required": [7], "held": [7]}) is True
    assert authorize({"required": [5], "held": []}) is False


def test_authorize_endpoint_rejects_unknown_mode(client: TestClient) -> None:
    response = client.post("/api/v1/authorize", json={"required": [1], "mode": "some"})
    assert response.status_code == 422
