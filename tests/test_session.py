"""Tests for Session: login, logout and gated GETs."""

import asyncio
import json
import sys
from pathlib import Path
from unittest import TestCase, main

import httpx

# Allow importing stocksync when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from stocksync.api.client import ApiClient, Success
from stocksync.api.endpoints import CATEGORIES
from stocksync.auth.session import INVALID_CREDENTIALS_MESSAGE, Session
from stocksync.auth.token_store import AUTH_TOKEN_KEY, USER_KEY, MemoryCredentialStore
from stocksync.errors import CONNECTION_FAILED_MESSAGE, FailureKind

BASE_URL = "https://api.test/api"

USER = {"id": "u-1", "fullName": "Asha Rao", "email": "asha@example.com", "roles": ["Admin"]}


class FakeSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, delay):
        self.calls.append(delay)


def make_session(handler, store=None, sleep=None):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    store = store if store is not None else MemoryCredentialStore()
    return Session(ApiClient(http_client=http), store, sleep=sleep or FakeSleep())


class TestLogin(TestCase):
    """POST /Auth/login handling."""

    def test_login_stores_token_and_user(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"token": "jwt-123", "user": USER})

        store = MemoryCredentialStore()
        session = make_session(handler, store)
        result = asyncio.run(session.login("asha@example.com", "secret"))

        self.assertTrue(result.ok)
        self.assertEqual(result.user.fullName, "Asha Rao")
        self.assertEqual(store.get_item(AUTH_TOKEN_KEY), "jwt-123")
        self.assertEqual(json.loads(store.get_item(USER_KEY))["email"], "asha@example.com")
        self.assertEqual(seen["path"], "/api/Auth/login")
        self.assertEqual(seen["body"], {"email": "asha@example.com", "password": "secret"})
        self.assertIsNone(seen["auth"])
        self.assertTrue(session.is_authenticated)
        self.assertEqual(session.current_user().id, "u-1")

    def test_rejected_login_uses_backend_message(self):
        session = make_session(lambda r: httpx.Response(400, json={"message": "Account is locked."}))
        result = asyncio.run(session.login("asha@example.com", "wrong"))
        self.assertFalse(result.ok)
        self.assertEqual(result.message, "Account is locked.")
        self.assertFalse(session.is_authenticated)

    def test_unauthorized_login_uses_backend_message(self):
        session = make_session(lambda r: httpx.Response(401, json={"message": "Wrong password for this account."}))
        result = asyncio.run(session.login("asha@example.com", "wrong"))
        self.assertFalse(result.ok)
        self.assertEqual(result.message, "Wrong password for this account.")
        self.assertFalse(session.is_authenticated)

    def test_rejected_login_without_message(self):
        session = make_session(lambda r: httpx.Response(401, text="Unauthorized"))
        result = asyncio.run(session.login("asha@example.com", "wrong"))
        self.assertEqual(result.message, INVALID_CREDENTIALS_MESSAGE)

    def test_login_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = asyncio.run(make_session(handler).login("asha@example.com", "secret"))
        self.assertFalse(result.ok)
        self.assertEqual(result.message, CONNECTION_FAILED_MESSAGE)

    def test_blank_credentials_never_reach_the_network(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"token": "x"})

        result = asyncio.run(make_session(handler).login("", ""))
        self.assertFalse(result.ok)
        self.assertEqual(calls, [])

    def test_logout_clears_both_keys(self):
        store = MemoryCredentialStore({AUTH_TOKEN_KEY: "t", USER_KEY: json.dumps(USER)})
        session = make_session(lambda r: httpx.Response(200), store)
        session.logout()
        self.assertIsNone(store.get_item(AUTH_TOKEN_KEY))
        self.assertIsNone(store.get_item(USER_KEY))
        self.assertFalse(session.is_authenticated)


class TestGatedGet(TestCase):
    """GETs go through the credential gate first."""

    def test_token_present_means_no_sleep_and_one_get(self):
        requests = []

        def handler(request):
            requests.append((request.method, request.url.path, request.headers.get("Authorization")))
            return httpx.Response(200, json=[{"id": 1, "name": "Tools", "description": "Hand tools"}])

        sleep = FakeSleep()
        session = make_session(handler, MemoryCredentialStore({AUTH_TOKEN_KEY: "tok"}), sleep)
        result = asyncio.run(session.get(CATEGORIES))
        self.assertIsInstance(result, Success)
        self.assertEqual(result.payload[0].name, "Tools")
        self.assertEqual(requests, [("GET", "/api/Category", "Bearer tok")])
        self.assertEqual(sleep.calls, [])

    def test_missing_token_retries_then_fails_without_request(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=[])

        sleep = FakeSleep()
        session = make_session(handler, sleep=sleep)
        result = asyncio.run(session.get(CATEGORIES))
        self.assertEqual(result.kind, FailureKind.NO_CREDENTIAL)
        self.assertEqual(sleep.calls, [0.5, 0.5, 0.5])
        self.assertEqual(requests, [])

    def test_per_call_retry_override(self):
        sleep = FakeSleep()
        session = make_session(lambda r: httpx.Response(200, json=[]), sleep=sleep)
        asyncio.run(session.get(CATEGORIES, max_retries=5, retry_delay=1.0))
        self.assertEqual(sleep.calls, [1.0] * 5)

    def test_explicit_token_skips_gate(self):
        sleep = FakeSleep()
        session = make_session(lambda r: httpx.Response(200, json=[]), sleep=sleep)
        result = asyncio.run(session.get(CATEGORIES, token="given"))
        self.assertIsInstance(result, Success)
        self.assertEqual(sleep.calls, [])


if __name__ == "__main__":
    main()
