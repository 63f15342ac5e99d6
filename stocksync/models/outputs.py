"""Response payloads: counts, report rows, envelopes and the prediction output."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from stocksync.models.data import StockAlert, User

T = TypeVar("T")


class LoginResponse(BaseModel):
    """POST /Auth/login success body."""

    token: str = Field(min_length=1)
    user: Optional[User] = None


class UserCount(BaseModel):
    totalUsers: int


class ProductCount(BaseModel):
    totalProductCount: int


class MonthlyRevenue(BaseModel):
    totalRevenue: float


class ReorderAlerts(BaseModel):
    """GET /Sales/reorder-alerts body."""

    totalAlerts: Optional[int] = None
    alerts: list[StockAlert] = []

    @property
    def count(self) -> int:
        return self.totalAlerts if self.totalAlerts is not None else len(self.alerts)


class Envelope(BaseModel, Generic[T]):
    """{isSuccess, data, message} wrapper used by some report endpoints."""

    isSuccess: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class TopSellingProduct(BaseModel):
    productName: str
    sales: float = 0.0

    class Config:
        extra = "allow"


class CategoryProductCount(BaseModel):
    categoryName: str
    productCount: int

    class Config:
        extra = "allow"


class CategoryDistribution(BaseModel):
    categories: list[CategoryProductCount] = []


class PaymentMethodSummary(BaseModel):
    paymentMethod: str
    percentage: float = 0.0

    class Config:
        extra = "allow"


class UserSalesSummary(BaseModel):
    userName: str
    percentage: float = 0.0

    class Config:
        extra = "allow"


class StockLevelPredictionOutput(BaseModel):
    """AI suggestion: target refill value plus the model's explanation."""

    targetStockRefillValue: float = Field(
        description="The target inventory reorder value suggested by AI."
    )
    reasoning: str = Field(description="The reasoning behind the suggested reorder value.")
