from __future__ import annotations

import pytest

from ams_mcp.client import AmsAuthError
from ams_mcp.session import LOGGED_IN_KEY, LocalStorage, SessionGuard


def test_storage_round_trip(tmp_path):
    storage = LocalStorage(tmp_path / "nested" / "storage.json")

    assert storage.get_item("missing") is None
    storage.set_item("theme", "dark")
    assert LocalStorage(tmp_path / "nested" / "storage.json").get_item("theme") == "dark"
    storage.remove_item("theme")
    assert storage.get_item("theme") is None


def test_unreadable_storage_is_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalStorage(path).get_item(LOGGED_IN_KEY) is None


@pytest.mark.parametrize("value", [None, "false", "TRUE", "1", ""])
def test_guard_rejects_anything_but_true(storage, value):
    if value is not None:
        storage.set_item(LOGGED_IN_KEY, value)
    guard = SessionGuard(storage)

    assert guard.is_authenticated() is False
    with pytest.raises(AmsAuthError, match="redirecting to /"):
        guard.require()


def test_guard_login_logout(storage):
    guard = SessionGuard(storage)

    guard.login()
    assert storage.get_item(LOGGED_IN_KEY) == "true"
    guard.require()

    guard.logout()
    assert guard.is_authenticated() is False
