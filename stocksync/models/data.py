"""Records mirrored from the backend API (wire names kept as field names)."""

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field


class Category(BaseModel):
    """Product category."""

    id: int
    name: str
    description: Optional[str] = None


class Supplier(BaseModel):
    """Supplier contact record."""

    id: int
    name: str
    contactPerson: Optional[str] = None
    phoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class Customer(BaseModel):
    """Customer contact record."""

    id: int
    customerName: str
    phoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


StockStatus = Literal["Out of Stock", "Low Stock", "In Stock"]


def stock_status(quantity: int, threshold: float) -> StockStatus:
    """Out of Stock at zero, Low Stock at or below the safety/reorder level."""
    if quantity == 0:
        return "Out of Stock"
    if quantity <= threshold:
        return "Low Stock"
    return "In Stock"


class Product(BaseModel):
    """Product; categoryId/supplierId reference Category and Supplier (not enforced here).

    The backend spells the supplier key ``suppliersInfromationId`` on some rows.
    ``categoryName`` is filled in client-side from the category list.
    """

    id: int
    categoryId: int
    supplierId: int = Field(validation_alias=AliasChoices("supplierId", "suppliersInfromationId"))
    productName: str
    description: Optional[str] = None
    pricePerUnit: float = 0.0
    pricePerUnitPurchased: float = 0.0
    stockQuantity: int = 0
    sku: Optional[str] = None
    reorderLevel: Optional[int] = None
    safetyStock: Optional[float] = None
    leadTimeDays: Optional[int] = None
    categoryName: Optional[str] = None

    @property
    def stockStatus(self) -> str:
        threshold = self.safetyStock if self.safetyStock is not None else self.reorderLevel
        return stock_status(self.stockQuantity, threshold or 0)


class StockAlert(BaseModel):
    """Reorder suggestion computed server-side; the client only displays it."""

    productId: int
    productName: str
    currentStock: int
    reorderPoint: float
    safetyStock: float
    averageDailySales: float = 0.0
    leadTimeDays: int
    suggestedOrderQty: int
    urgencyLevel: Literal["LOW", "MEDIUM", "HIGH"]


class User(BaseModel):
    """Dashboard user profile."""

    id: str
    fullName: str
    email: str
    userName: Optional[str] = None
    roles: list[str] = []
