"""Authorized HTTP calls against the StockSync backend (async, httpx)."""

from typing import Any

import httpx
from opentelemetry.trace import SpanKind
from pydantic import BaseModel, TypeAdapter, ValidationError

from stocksync.config import API_BASE_URL, API_TIMEOUT_SECONDS, API_VERIFY_TLS
from stocksync.errors import (
    CONNECTION_FAILED_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
    Failure,
    FailureKind,
)
from stocksync.utils.logger import get_logger
from stocksync.utils.tracing import get_tracer

logger = get_logger("stocksync.api.client")

_MAX_DETAIL_CHARS = 500


class Success(BaseModel):
    """2xx response; payload is decoded JSON (or None for an empty body)."""

    payload: Any = None
    status_code: int = 200


CallResult = Success | Failure


def _body_text(response: httpx.Response) -> str | None:
    text = (response.text or "").strip()
    return text[:_MAX_DETAIL_CHARS] if text else None


def classify_response(response: httpx.Response) -> CallResult:
    """Map an HTTP response to Success / AuthExpired / ServerError (method-independent)."""
    status = response.status_code
    if 200 <= status < 300:
        if not response.content or not response.content.strip():
            return Success(payload=None, status_code=status)
        try:
            return Success(payload=response.json(), status_code=status)
        except ValueError:
            # Some mutation endpoints answer with a plain-text confirmation
            return Success(payload=response.text, status_code=status)
    body = _body_text(response)
    if status == 401:
        return Failure(
            kind=FailureKind.AUTH_EXPIRED,
            message=SESSION_EXPIRED_MESSAGE,
            status_code=status,
            detail=body,
        )
    return Failure(
        kind=FailureKind.SERVER_ERROR,
        message=body or f"Request failed with status {status}.",
        status_code=status,
        detail=body,
    )


class ApiClient:
    """One bearer-authenticated request per call; never raises for HTTP or transport failures.

    Pass ``http_client`` to share a configured ``httpx.AsyncClient`` (tests pass one
    built on ``httpx.MockTransport``); otherwise the client owns and closes its own.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = API_TIMEOUT_SECONDS,
        verify: bool = API_VERIFY_TLS,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            verify=verify,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def call(
        self,
        method: str,
        path: str,
        token: str | None = None,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> CallResult:
        """Issue one request. ``token`` is sent as ``Authorization: Bearer <token>`` when set."""
        method = method.upper()
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        attrs = {"http.method": method, "api.path": path}
        with get_tracer().start_as_current_span("api_call", kind=SpanKind.CLIENT, attributes=attrs) as span:
            try:
                response = await self._client.request(
                    method,
                    path,
                    headers=headers,
                    json=body,
                    params=params,
                )
            except httpx.TransportError as e:
                logger.warning(
                    "api.call.network_error",
                    method=method,
                    path=path,
                    error=str(e) or type(e).__name__,
                    error_type=type(e).__name__,
                )
                span.set_attribute("api.outcome", FailureKind.NETWORK_ERROR.value)
                return Failure(kind=FailureKind.NETWORK_ERROR, message=CONNECTION_FAILED_MESSAGE)
            span.set_attribute("http.status_code", response.status_code)
            result = classify_response(response)
            if isinstance(result, Failure):
                span.set_attribute("api.outcome", result.kind.value)
                log = logger.warning if result.kind is FailureKind.AUTH_EXPIRED else logger.error
                log(
                    "api.call.failed",
                    method=method,
                    path=path,
                    status_code=response.status_code,
                    kind=result.kind.value,
                )
            else:
                span.set_attribute("api.outcome", "Success")
                logger.debug("api.call.ok", method=method, path=path, status_code=response.status_code)
            return result


def parse_payload(result: CallResult, adapter: TypeAdapter, path: str) -> Success | Failure:
    """Validate a Success payload against the endpoint schema; mismatches become ServerError."""
    if isinstance(result, Failure):
        return result
    try:
        parsed = adapter.validate_python(result.payload)
    except ValidationError as e:
        logger.error(
            "api.response.schema_mismatch",
            path=path,
            errors=e.errors(include_url=False)[:5],
        )
        return Failure(
            kind=FailureKind.SERVER_ERROR,
            message=f"Unexpected response from {path}.",
            status_code=result.status_code,
        )
    return Success(payload=parsed, status_code=result.status_code)
