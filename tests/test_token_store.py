"""Tests for credential stores (memory and JSON file)."""

import json
import sys
from pathlib import Path

# Allow importing stocksync when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from stocksync.auth.token_store import (
    AUTH_TOKEN_KEY,
    USER_KEY,
    FileCredentialStore,
    MemoryCredentialStore,
    read_token,
    read_user,
)


def test_file_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "session.json"
    FileCredentialStore(path).set_item(AUTH_TOKEN_KEY, "tok-1")
    assert FileCredentialStore(path).get_item(AUTH_TOKEN_KEY) == "tok-1"
    assert json.loads(path.read_text(encoding="utf-8")) == {AUTH_TOKEN_KEY: "tok-1"}


def test_file_store_remove_item(tmp_path):
    store = FileCredentialStore(tmp_path / "session.json")
    store.set_item(AUTH_TOKEN_KEY, "tok")
    store.set_item(USER_KEY, "{}")
    store.remove_item(AUTH_TOKEN_KEY)
    store.remove_item("missing")
    assert store.get_item(AUTH_TOKEN_KEY) is None
    assert store.get_item(USER_KEY) == "{}"


def test_file_store_sees_external_writes(tmp_path):
    path = tmp_path / "session.json"
    store = FileCredentialStore(path)
    assert store.get_item(AUTH_TOKEN_KEY) is None
    path.write_text(json.dumps({AUTH_TOKEN_KEY: "written-later"}), encoding="utf-8")
    assert store.get_item(AUTH_TOKEN_KEY) == "written-later"


def test_file_store_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert FileCredentialStore(path).get_item(AUTH_TOKEN_KEY) is None


def test_read_user_round_trip_and_garbage():
    store = MemoryCredentialStore(
        {USER_KEY: json.dumps({"id": "u-1", "fullName": "Asha Rao", "email": "asha@example.com", "roles": ["Admin"]})}
    )
    user = read_user(store)
    assert user.fullName == "Asha Rao"
    assert user.roles == ["Admin"]
    store.set_item(USER_KEY, "not-json")
    assert read_user(store) is None


def test_read_token_blank_is_none():
    assert read_token(MemoryCredentialStore({AUTH_TOKEN_KEY: ""})) is None
    assert read_token(MemoryCredentialStore({AUTH_TOKEN_KEY: "t"})) == "t"
