"""Client-side credential storage: the bearer token and the signed-in user profile.

Mirrors the browser's local storage keys (``authToken``, ``user``). The file-backed
store persists them as JSON so a login survives across CLI invocations.
"""

import json
from pathlib import Path
from typing import Protocol

from stocksync.models.data import User
from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.auth.token_store")

AUTH_TOKEN_KEY = "authToken"
USER_KEY = "user"


class CredentialStore(Protocol):
    """Key/value storage for the session (string values only)."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryCredentialStore:
    """In-process store; used by tests and embedding applications."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileCredentialStore:
    """JSON file store. Re-reads the file on every access so a concurrent login is seen."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("token_store.load_error", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("token_store.invalid_shape", path=str(self._path))
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)


def read_token(store: CredentialStore) -> str | None:
    """Return the stored bearer token, treating blank values as absent."""
    token = store.get_item(AUTH_TOKEN_KEY)
    if token is None or not token.strip():
        return None
    return token


def read_user(store: CredentialStore) -> User | None:
    """Return the stored user profile, or None when missing or unreadable."""
    raw = store.get_item(USER_KEY)
    if not raw:
        return None
    try:
        return User.model_validate_json(raw)
    except ValueError as e:
        logger.warning("token_store.user_invalid", error=str(e))
        return None
