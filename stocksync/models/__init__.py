"""Pydantic models for the StockSync client."""

from stocksync.models.data import (
    Category,
    Customer,
    Product,
    StockAlert,
    Supplier,
    User,
)
from stocksync.models.inputs import (
    AddStockInput,
    CategoryInput,
    CustomerInput,
    LoginInput,
    ProductInput,
    StockLevelPredictionInput,
    SupplierInput,
    UserRegistrationInput,
)
from stocksync.models.outputs import (
    CategoryProductCount,
    LoginResponse,
    PaymentMethodSummary,
    ReorderAlerts,
    StockLevelPredictionOutput,
    TopSellingProduct,
    UserSalesSummary,
)

__all__ = [
    "Category",
    "Customer",
    "Product",
    "StockAlert",
    "Supplier",
    "User",
    "AddStockInput",
    "CategoryInput",
    "CustomerInput",
    "LoginInput",
    "ProductInput",
    "StockLevelPredictionInput",
    "SupplierInput",
    "UserRegistrationInput",
    "CategoryProductCount",
    "LoginResponse",
    "PaymentMethodSummary",
    "ReorderAlerts",
    "StockLevelPredictionOutput",
    "TopSellingProduct",
    "UserSalesSummary",
]
