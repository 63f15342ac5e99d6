"""Reports view: four datasets fetched concurrently under one credential."""

import asyncio

from pydantic import BaseModel

from stocksync.api import endpoints
from stocksync.api.client import Success
from stocksync.auth.session import Session
from stocksync.config import TOP_SELLING_COUNT
from stocksync.errors import Failure, FailureKind, no_credential
from stocksync.models.outputs import (
    CategoryProductCount,
    PaymentMethodSummary,
    TopSellingProduct,
    UserSalesSummary,
)
from stocksync.utils.logger import get_logger
from stocksync.views.notifications import Notifier
from stocksync.views.state import DataView

logger = get_logger("stocksync.reports.loader")

_FETCH_ERRORS = {
    "top_selling": "Failed to fetch top-selling products.",
    "products_by_category": "Failed to fetch product distribution data.",
    "payment_methods": "Failed to fetch payment method summary.",
    "user_sales": "Failed to fetch user sales summary.",
}


class ReportData(BaseModel):
    topSellingProducts: list[TopSellingProduct] = []
    productsByCategory: list[CategoryProductCount] = []
    paymentMethodSummary: list[PaymentMethodSummary] = []
    userSalesSummary: list[UserSalesSummary] = []


def _dataset_failure(key: str, failure: Failure) -> Failure:
    if failure.kind is FailureKind.SERVER_ERROR:
        return Failure(kind=failure.kind, message=_FETCH_ERRORS[key], status_code=failure.status_code)
    return failure


async def load_reports(session: Session, top_count: int = TOP_SELLING_COUNT) -> Success | Failure:
    """Resolve the credential once, then fetch every dataset in parallel.

    The first failing dataset (in display order) becomes the view's reason.
    """
    token = await session.credential()
    if token is None:
        return no_credential()
    keys = ("top_selling", "products_by_category", "payment_methods", "user_sales")
    results = await asyncio.gather(
        session.get(endpoints.top_selling_products(top_count), token=token),
        session.get(endpoints.PRODUCTS_BY_CATEGORY, token=token),
        session.get(endpoints.PAYMENT_METHOD_SUMMARY, token=token),
        session.get(endpoints.USER_SALES_SUMMARY, token=token),
    )
    for key, result in zip(keys, results):
        if isinstance(result, Failure):
            logger.warning("reports.dataset_failed", dataset=key, kind=result.kind.value)
            return _dataset_failure(key, result)
    top_selling, by_category, payments, user_sales = (r.payload for r in results)
    for key, envelope in (("products_by_category", by_category), ("payment_methods", payments)):
        if not envelope.isSuccess or envelope.data is None:
            logger.warning("reports.envelope_unsuccessful", dataset=key, message=envelope.message)
            return Failure(kind=FailureKind.SERVER_ERROR, message=envelope.message or _FETCH_ERRORS[key])
    data = ReportData(
        topSellingProducts=top_selling,
        productsByCategory=by_category.data.categories,
        paymentMethodSummary=payments.data,
        userSalesSummary=user_sales,
    )
    return Success(payload=data)


def reports_view(session: Session, notifier: Notifier | None = None) -> DataView:
    return DataView(
        name="reports",
        session=session,
        loader=load_reports,
        notifier=notifier,
        error_title="Error fetching report data",
    )
