"""Tests for the products list: stock status, supplier key drift and category names."""

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
from stocksync.errors import FailureKind
from stocksync.models.data import Product, stock_status
from stocksync.views.notifications import Notifier
from stocksync.views.resources import PRODUCTS, resource_view
from stocksync.views.state import Ready, Unavailable

BASE_URL = "https://api.test/api"

PRODUCT_ROWS = [
    {
        "id": 1,
        "categoryId": 2,
        "suppliersInfromationId": 3,
        "productName": "Claw Hammer",
        "description": "Steel claw hammer",
        "pricePerUnit": 12.5,
        "pricePerUnitPurchased": 8,
        "stockQuantity": 4,
        "sku": "HAM-1",
        "safetyStock": 5,
        "leadTimeDays": 7,
    },
    {
        "id": 2,
        "categoryId": 9,
        "supplierId": 4,
        "productName": "Masking Tape",
        "stockQuantity": 0,
    },
    {
        "id": 3,
        "categoryId": 2,
        "supplierId": 3,
        "productName": "Tape Measure",
        "stockQuantity": 30,
        "reorderLevel": 10,
    },
]

CATEGORY_ROWS = [{"id": 2, "name": "Tools", "description": None}]


def make_session(overrides=None):
    responses = {"/api/Product": PRODUCT_ROWS, "/api/Category": CATEGORY_ROWS, **(overrides or {})}
    seen = []

    def handler(request):
        seen.append(request.url.path)
        body = responses[request.url.path]
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    store = MemoryCredentialStore({AUTH_TOKEN_KEY: "tok"})
    return Session(ApiClient(http_client=http), store), seen


class TestStockStatus(TestCase):
    def test_thresholds(self):
        self.assertEqual(stock_status(0, 5), "Out of Stock")
        self.assertEqual(stock_status(5, 5), "Low Stock")
        self.assertEqual(stock_status(6, 5), "In Stock")
        self.assertEqual(stock_status(0, 0), "Out of Stock")

    def test_product_prefers_safety_stock_then_reorder_level(self):
        product = Product(id=1, categoryId=1, supplierId=1, productName="P", stockQuantity=8, safetyStock=10, reorderLevel=2)
        self.assertEqual(product.stockStatus, "Low Stock")
        product = Product(id=1, categoryId=1, supplierId=1, productName="P", stockQuantity=8, reorderLevel=2)
        self.assertEqual(product.stockStatus, "In Stock")


class TestProductsView(TestCase):
    def test_misspelled_supplier_key_is_accepted(self):
        product = Product.model_validate(PRODUCT_ROWS[0])
        self.assertEqual(product.supplierId, 3)
        self.assertEqual(product.model_dump()["supplierId"], 3)

    def test_products_are_joined_with_category_names(self):
        session, seen = make_session()
        view = resource_view(session, PRODUCTS)
        asyncio.run(view.refresh())
        self.assertIsInstance(view.state, Ready)
        self.assertEqual(sorted(seen), ["/api/Category", "/api/Product"])
        by_id = {p.id: p for p in view.data}
        self.assertEqual(by_id[1].categoryName, "Tools")
        self.assertEqual(by_id[2].categoryName, "N/A")
        self.assertEqual(by_id[1].stockStatus, "Low Stock")
        self.assertEqual(by_id[2].stockStatus, "Out of Stock")
        self.assertEqual(by_id[3].stockStatus, "In Stock")

    def test_category_failure_makes_list_unavailable(self):
        notifier = Notifier()
        session, _ = make_session({"/api/Category": httpx.Response(500)})
        view = resource_view(session, PRODUCTS, notifier)
        asyncio.run(view.refresh())
        self.assertIsInstance(view.state, Unavailable)
        self.assertEqual(view.state.reason.message, "Failed to fetch categories. The server might be unavailable.")
        self.assertEqual(notifier.last.variant, "destructive")

    def test_expired_session_keeps_its_message(self):
        session, _ = make_session({"/api/Product": httpx.Response(401)})
        view = resource_view(session, PRODUCTS)
        asyncio.run(view.refresh())
        self.assertEqual(view.state.reason.kind, FailureKind.AUTH_EXPIRED)
        self.assertIn("session has expired", view.state.reason.message)


if __name__ == "__main__":
    main()
