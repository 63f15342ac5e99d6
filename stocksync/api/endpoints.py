"""Backend endpoints and the one schema each of them is allowed to return."""

from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from stocksync.models.data import Category, Customer, Product, Supplier, User
from stocksync.models.outputs import (
    CategoryDistribution,
    Envelope,
    LoginResponse,
    MonthlyRevenue,
    PaymentMethodSummary,
    ProductCount,
    ReorderAlerts,
    TopSellingProduct,
    UserCount,
    UserSalesSummary,
)


@dataclass(frozen=True)
class Endpoint:
    """A GET path plus the adapter validating its body."""

    path: str
    adapter: TypeAdapter
    params: tuple[tuple[str, Any], ...] = ()

    @property
    def query(self) -> dict[str, Any] | None:
        return dict(self.params) if self.params else None


LOGIN_PATH = "/Auth/login"
LOGIN_RESPONSE = TypeAdapter(LoginResponse)
USER_REGISTER_PATH = "/Auth/MobileUserRegister"

USER_COUNT = Endpoint("/Auth/UserCount", TypeAdapter(UserCount))
CATEGORY_COUNT = Endpoint("/Category/count", TypeAdapter(int))
PRODUCT_COUNT = Endpoint("/Product/Productcount", TypeAdapter(ProductCount))
MONTHLY_REVENUE = Endpoint("/Sales/monthly-revenue", TypeAdapter(MonthlyRevenue))
REORDER_ALERTS = Endpoint("/Sales/reorder-alerts", TypeAdapter(ReorderAlerts))

CATEGORIES = Endpoint("/Category", TypeAdapter(list[Category]))
PRODUCTS = Endpoint("/Product", TypeAdapter(list[Product]))
SUPPLIERS = Endpoint("/SupplierInformation", TypeAdapter(list[Supplier]))
CUSTOMERS = Endpoint("/Customers", TypeAdapter(list[Customer]))
USERS = Endpoint("/Auth", TypeAdapter(list[User]))


def top_selling_products(top_count: int) -> Endpoint:
    return Endpoint(
        "/Sales/top-selling-products",
        TypeAdapter(list[TopSellingProduct]),
        params=(("topCount", top_count),),
    )


PRODUCTS_BY_CATEGORY = Endpoint(
    "/Product/products-by-category",
    TypeAdapter(Envelope[CategoryDistribution]),
)
PAYMENT_METHOD_SUMMARY = Endpoint(
    "/Sales/payment-method-summary",
    TypeAdapter(Envelope[list[PaymentMethodSummary]]),
)
USER_SALES_SUMMARY = Endpoint("/Sales/user-sales-summary", TypeAdapter(list[UserSalesSummary]))


def add_quantity_path(product_id: int) -> str:
    return f"/Product/{product_id}/add-quantity"
