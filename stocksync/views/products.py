"""Products list: products joined with their category names."""

import asyncio

from stocksync.api import endpoints
from stocksync.api.client import Success
from stocksync.auth.session import Session
from stocksync.errors import Failure, FailureKind, no_credential
from stocksync.models.data import Category, Product
from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.views.products")

UNKNOWN_CATEGORY = "N/A"

_FETCH_ERRORS = {
    "products": "Failed to fetch products. The server might be down or experiencing issues.",
    "categories": "Failed to fetch categories. The server might be unavailable.",
}


def with_category_names(products: list[Product], categories: list[Category]) -> list[Product]:
    names = {c.id: c.name for c in categories}
    return [
        p.model_copy(update={"categoryName": names.get(p.categoryId, UNKNOWN_CATEGORY)})
        for p in products
    ]


async def load_products(session: Session) -> Success | Failure:
    """GET /Product and /Category together under one credential; either failing fails the list."""
    token = await session.credential()
    if token is None:
        return no_credential()
    products, categories = await asyncio.gather(
        session.get(endpoints.PRODUCTS, token=token),
        session.get(endpoints.CATEGORIES, token=token),
    )
    for key, result in (("products", products), ("categories", categories)):
        if isinstance(result, Failure):
            logger.warning("products.fetch_failed", dataset=key, kind=result.kind.value)
            if result.kind is FailureKind.SERVER_ERROR:
                return result.model_copy(update={"message": _FETCH_ERRORS[key]})
            return result
    return Success(payload=with_category_names(products.payload, categories.payload))
