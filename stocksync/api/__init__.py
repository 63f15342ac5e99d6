"""Backend REST API access."""

from stocksync.api.client import ApiClient, CallResult, Success, classify_response, parse_payload
from stocksync.api.endpoints import Endpoint

__all__ = [
    "ApiClient",
    "CallResult",
    "Endpoint",
    "Success",
    "classify_response",
    "parse_payload",
]
