"""Tests for dashboard stat cards."""

import asyncio
import sys
from pathlib import Path
from unittest import TestCase, main

import httpx

# Allow importing stocksync when running from project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from stocksync.api.client import ApiClient
from stocksync.auth.session import Session
from stocksync.auth.token_store import AUTH_TOKEN_KEY, MemoryCredentialStore
from stocksync.views.dashboard import PLACEHOLDER, UNAVAILABLE, Dashboard
from stocksync.views.notifications import Notifier

BASE_URL = "https://api.test/api"

ALERT = {
    "productId": 7,
    "productName": "Claw Hammer",
    "currentStock": 3,
    "reorderPoint": 12.5,
    "safetyStock": 4,
    "averageDailySales": 1.2,
    "leadTimeDays": 7,
    "suggestedOrderQty": 40,
    "urgencyLevel": "HIGH",
}


class FakeSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, delay):
        self.calls.append(delay)


def stats_handler(revenue_response):
    def handler(request):
        path = request.url.path
        if path == "/api/Category/count":
            return httpx.Response(200, json=12)
        if path == "/api/Product/Productcount":
            return httpx.Response(200, json={"totalProductCount": 40})
        if path == "/api/Auth/UserCount":
            return httpx.Response(200, json={"totalUsers": 3})
        if path == "/api/Sales/reorder-alerts":
            return httpx.Response(200, json={"alerts": [ALERT, {**ALERT, "productId": 8}]})
        if path == "/api/Sales/monthly-revenue":
            return revenue_response
        return httpx.Response(404)

    return handler


def make_dashboard(handler, token="tok", sleep=None):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    store = MemoryCredentialStore({AUTH_TOKEN_KEY: token} if token else {})
    session = Session(ApiClient(http_client=http), store, sleep=sleep or FakeSleep())
    notifier = Notifier()
    return Dashboard(session, notifier), notifier


class TestDashboard(TestCase):
    """Each card resolves independently."""

    def test_placeholders_before_first_fetch(self):
        board, _ = make_dashboard(stats_handler(httpx.Response(200, json={"totalRevenue": 1})))
        self.assertEqual(set(board.values().values()), {PLACEHOLDER})

    def test_values_after_refresh(self):
        board, notifier = make_dashboard(stats_handler(httpx.Response(200, json={"totalRevenue": 45231.5})))
        values = asyncio.run(board.refresh())
        self.assertEqual(
            values,
            {
                "Total Categories": "12",
                "Total Products": "40",
                "Total Users": "3",
                "Stock Alerts": "2",
                "Monthly Revenue": "Rs. 45231.50",
            },
        )
        self.assertEqual(notifier.notifications, [])

    def test_one_failing_card_does_not_affect_others(self):
        board, notifier = make_dashboard(stats_handler(httpx.Response(500, text="db down")))
        values = asyncio.run(board.refresh())
        self.assertEqual(values["Monthly Revenue"], UNAVAILABLE)
        self.assertEqual(values["Total Products"], "40")
        self.assertEqual(len(notifier.notifications), 1)
        self.assertEqual(notifier.last.title, "API Error")

    def test_identical_failures_share_one_notification(self):
        def handler(request):
            if request.url.path == "/api/Sales/monthly-revenue":
                return httpx.Response(200, json={"totalRevenue": 0})
            return httpx.Response(500)

        board, notifier = make_dashboard(handler)
        values = asyncio.run(board.refresh())
        self.assertEqual(values["Total Categories"], UNAVAILABLE)
        self.assertEqual(values["Stock Alerts"], UNAVAILABLE)
        self.assertEqual(values["Monthly Revenue"], "Rs. 0.00")
        self.assertEqual(len(notifier.notifications), 1)
        self.assertEqual(notifier.last.description, "Request failed with status 500.")

    def test_expired_session_on_count_cards_notifies_once(self):
        def handler(request):
            if request.url.path == "/api/Sales/monthly-revenue":
                return httpx.Response(200, json={"totalRevenue": 10})
            return httpx.Response(401)

        board, notifier = make_dashboard(handler)
        values = asyncio.run(board.refresh())
        self.assertEqual(values["Stock Alerts"], UNAVAILABLE)
        self.assertEqual(values["Monthly Revenue"], "Rs. 10.00")
        self.assertEqual(len(notifier.notifications), 1)
        self.assertEqual(notifier.last.title, "API Error")
        self.assertIn("session has expired", notifier.last.description)

    def test_distinct_failures_each_notify(self):
        base = stats_handler(httpx.Response(200, json={"totalRevenue": 1}))

        def handler(request):
            if request.url.path == "/api/Sales/reorder-alerts":
                return httpx.Response(401)
            if request.url.path == "/api/Product/Productcount":
                return httpx.Response(503, text="maintenance")
            return base(request)

        board, notifier = make_dashboard(handler)
        asyncio.run(board.refresh())
        descriptions = sorted(n.description for n in notifier.notifications)
        self.assertEqual(len(descriptions), 2)
        self.assertIn("maintenance", descriptions)

    def test_each_card_uses_its_own_retry_policy(self):
        sleep = FakeSleep()
        board, notifier = make_dashboard(stats_handler(httpx.Response(200, json={"totalRevenue": 1})), token=None, sleep=sleep)
        values = asyncio.run(board.refresh())
        self.assertEqual(set(values.values()), {UNAVAILABLE})
        # categories: 5 x 1.0s; products, users, alerts: 3 x 0.5s each; revenue: none
        self.assertEqual(sleep.calls.count(1.0), 5)
        self.assertEqual(sleep.calls.count(0.5), 9)
        self.assertEqual(len(sleep.calls), 14)
        self.assertEqual(notifier.notifications, [])


if __name__ == "__main__":
    main()
