"""Session credential storage, resolution and login."""

from stocksync.auth.session import LoginResult, Session
from stocksync.auth.token_gate import resolve_credential
from stocksync.auth.token_store import (
    AUTH_TOKEN_KEY,
    USER_KEY,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)

__all__ = [
    "AUTH_TOKEN_KEY",
    "USER_KEY",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "LoginResult",
    "Session",
    "resolve_credential",
]
