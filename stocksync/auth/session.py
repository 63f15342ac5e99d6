"""Injectable session: credential store + API client, passed to every data-access call."""

import asyncio
import json
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from stocksync.api.client import ApiClient, CallResult, Success, parse_payload
from stocksync.api.endpoints import LOGIN_PATH, LOGIN_RESPONSE, Endpoint
from stocksync.auth.token_gate import Sleep, resolve_credential
from stocksync.auth.token_store import (
    AUTH_TOKEN_KEY,
    USER_KEY,
    CredentialStore,
    read_token,
    read_user,
)
from stocksync.config import CREDENTIAL_MAX_RETRIES, CREDENTIAL_RETRY_DELAY
from stocksync.errors import CONNECTION_FAILED_MESSAGE, Failure, FailureKind, no_credential
from stocksync.models.data import User
from stocksync.models.inputs import LoginInput
from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.auth.session")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials. Please try again."


class LoginResult(BaseModel):
    ok: bool
    message: str
    user: Optional[User] = None


class Session:
    """Owns the auth boundary: who is signed in and how requests get their bearer token."""

    def __init__(
        self,
        client: ApiClient,
        store: CredentialStore,
        max_retries: int = CREDENTIAL_MAX_RETRIES,
        retry_delay: float = CREDENTIAL_RETRY_DELAY,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = client
        self.store = store
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    @property
    def is_authenticated(self) -> bool:
        return read_token(self.store) is not None

    def current_user(self) -> User | None:
        return read_user(self.store)

    async def credential(
        self,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> str | None:
        """Resolve the bearer token, retrying while it is absent (bounded).

        Per-call overrides let a view use its own retry policy without a new session.
        """
        return await resolve_credential(
            self.store,
            max_retries=self.max_retries if max_retries is None else max_retries,
            retry_delay=self.retry_delay if retry_delay is None else retry_delay,
            sleep=self._sleep,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> CallResult:
        """Resolve the credential, then issue one authorized call."""
        token = await self.credential()
        if token is None:
            return no_credential()
        return await self.client.call(method, path, token=token, body=body, params=params)

    async def get(
        self,
        endpoint: Endpoint,
        token: str | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
    ) -> Success | Failure:
        """GET an endpoint and validate the body against its schema.

        A caller that already resolved ``token`` (e.g. for several parallel reads) skips the gate.
        """
        if token is None:
            token = await self.credential(max_retries=max_retries, retry_delay=retry_delay)
            if token is None:
                return no_credential()
        result = await self.client.call("GET", endpoint.path, token=token, params=endpoint.query)
        return parse_payload(result, endpoint.adapter, endpoint.path)

    async def login(self, email: str, password: str) -> LoginResult:
        """POST /Auth/login; on success persist ``authToken`` and ``user``."""
        try:
            creds = LoginInput(email=email, password=password)
        except ValidationError:
            return LoginResult(ok=False, message="Email and password are required.")
        result = await self.client.call("POST", LOGIN_PATH, body=creds.model_dump())
        if isinstance(result, Failure):
            if result.kind is FailureKind.NETWORK_ERROR:
                return LoginResult(ok=False, message=CONNECTION_FAILED_MESSAGE)
            logger.info("session.login.rejected", status_code=result.status_code)
            return LoginResult(ok=False, message=_login_error_message(result))
        parsed = parse_payload(result, LOGIN_RESPONSE, LOGIN_PATH)
        if isinstance(parsed, Failure):
            return LoginResult(ok=False, message=parsed.message)
        response = parsed.payload
        self.store.set_item(AUTH_TOKEN_KEY, response.token)
        if response.user is not None:
            self.store.set_item(USER_KEY, response.user.model_dump_json())
        logger.info("session.login.ok", email=creds.email)
        return LoginResult(ok=True, message="Login Successful", user=response.user)

    def logout(self) -> None:
        """Destroy the credential and the cached profile."""
        self.store.remove_item(AUTH_TOKEN_KEY)
        self.store.remove_item(USER_KEY)
        logger.info("session.logout")


def _login_error_message(failure: Failure) -> str:
    """Prefer the backend's ``message`` field (any status, 401 included); else a generic rejection."""
    if not failure.detail:
        return INVALID_CREDENTIALS_MESSAGE
    try:
        data = json.loads(failure.detail)
    except ValueError:
        return INVALID_CREDENTIALS_MESSAGE
    if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"].strip():
        return data["message"]
    return INVALID_CREDENTIALS_MESSAGE
