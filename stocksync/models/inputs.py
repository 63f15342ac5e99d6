"""Form input schemas. Rejections here never reach the network."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginInput(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class CategoryInput(BaseModel):
    """Create/update payload for a category."""

    name: str = Field(min_length=2)
    description: str = ""


class SupplierInput(BaseModel):
    """Create/update payload for a supplier."""

    name: str = Field(min_length=2)
    contactPerson: str = Field(min_length=2)
    phoneNumber: str = Field(min_length=10)
    email: EmailStr
    address: str = Field(min_length=5)


class CustomerInput(BaseModel):
    """Create/update payload for a customer."""

    customerName: str = Field(min_length=2)
    phoneNumber: str = Field(min_length=10)
    email: EmailStr
    address: str = Field(min_length=5)


class ProductInput(BaseModel):
    """Create/update payload for a product."""

    productName: str = Field(min_length=2)
    description: str = Field(min_length=5)
    pricePerUnit: float = Field(ge=0)
    pricePerUnitPurchased: float = Field(ge=0)
    stockQuantity: int = Field(ge=0)
    reorderLevel: int = Field(default=0, ge=0)
    sku: str = Field(min_length=1)
    categoryId: int = Field(ge=1)
    supplierId: int = Field(ge=1)
    leadTimeDays: Optional[int] = Field(default=None, ge=0)


class UserRegistrationInput(BaseModel):
    """Payload for registering a dashboard user."""

    fullName: str = Field(min_length=2)
    email: EmailStr
    password: str = Field(min_length=6)


class AddStockInput(BaseModel):
    """Quantity added to a product from a reorder alert."""

    quantityToAdd: int = Field(gt=0)


class StockLevelPredictionInput(BaseModel):
    """Inputs for the AI target-stock suggestion."""

    monthlyRevenue: float = Field(ge=0, description="The monthly revenue.")
    totalProducts: int = Field(ge=1, description="The total number of products.")
    stockAlerts: int = Field(ge=0, description="The number of stock alerts (items running low).")
    currentInventoryValue: float = Field(ge=0, description="The current inventory value.")
