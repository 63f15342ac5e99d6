"""Resource registry: maps resource names (from the CLI) to their endpoints and schemas."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from stocksync.api import endpoints
from stocksync.api.endpoints import Endpoint
from stocksync.auth.session import Session
from stocksync.models.data import Category, Customer, Product, StockAlert, Supplier, User
from stocksync.models.inputs import (
    AddStockInput,
    CategoryInput,
    CustomerInput,
    ProductInput,
    SupplierInput,
    UserRegistrationInput,
)
from stocksync.utils.logger import get_logger
from stocksync.views.notifications import Notifier
from stocksync.views.products import load_products
from stocksync.views.state import DataView, Loader, endpoint_loader

logger = get_logger("stocksync.views.resources")


class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ADD_STOCK = "add_stock"


OPERATION_METHODS = {
    Operation.CREATE: "POST",
    Operation.UPDATE: "PUT",
    Operation.DELETE: "DELETE",
    Operation.ADD_STOCK: "PATCH",
}


@dataclass(frozen=True)
class Resource:
    """How one record type is listed and mutated through the backend."""

    name: str
    label: str
    base_path: str
    list_endpoint: Endpoint
    record_model: type[BaseModel]
    input_model: type[BaseModel] | None = None
    operations: frozenset[Operation] = frozenset({Operation.CREATE, Operation.UPDATE, Operation.DELETE})
    id_field: str = "id"
    create_path: str | None = None
    list_transform: Callable[[Any], Any] | None = None
    list_loader: Loader | None = None
    action_paths: dict[Operation, Callable[[Any], str]] = field(default_factory=dict)
    action_models: dict[Operation, type[BaseModel]] = field(default_factory=dict)
    columns: tuple[str, ...] = ()

    def supports(self, operation: Operation) -> bool:
        return operation in self.operations

    def entity_id(self, entity: Any) -> Any:
        return getattr(entity, self.id_field)

    def path_for(self, operation: Operation, entity: Any = None) -> str:
        if operation is Operation.CREATE:
            return self.create_path or self.base_path
        if operation in self.action_paths:
            return self.action_paths[operation](self.entity_id(entity))
        return f"{self.base_path}/{self.entity_id(entity)}"

    def model_for(self, operation: Operation) -> type[BaseModel] | None:
        if operation in self.action_models:
            return self.action_models[operation]
        if operation in (Operation.CREATE, Operation.UPDATE):
            return self.input_model
        return None


_RESOURCE_REGISTRY: dict[str, Resource] = {}


def register_resource(resource: Resource) -> Resource:
    _RESOURCE_REGISTRY[resource.name] = resource
    return resource


def get_resource(name: str) -> Resource:
    """Return the resource for the given name. Raises ValueError if unknown."""
    if name not in _RESOURCE_REGISTRY:
        raise ValueError(
            f"Unknown resource: {name!r}. Registered: {list(_RESOURCE_REGISTRY)}"
        )
    return _RESOURCE_REGISTRY[name]


def list_resources() -> list[str]:
    return list(_RESOURCE_REGISTRY.keys())


CATEGORIES = register_resource(
    Resource(
        name="categories",
        label="category",
        base_path="/Category",
        list_endpoint=endpoints.CATEGORIES,
        record_model=Category,
        input_model=CategoryInput,
        columns=("id", "name", "description"),
    )
)

PRODUCTS = register_resource(
    Resource(
        name="products",
        label="product",
        base_path="/Product",
        list_endpoint=endpoints.PRODUCTS,
        record_model=Product,
        input_model=ProductInput,
        list_loader=load_products,
        columns=(
            "id",
            "productName",
            "categoryName",
            "sku",
            "pricePerUnit",
            "stockQuantity",
            "safetyStock",
            "stockStatus",
        ),
    )
)

SUPPLIERS = register_resource(
    Resource(
        name="suppliers",
        label="supplier",
        base_path="/SupplierInformation",
        list_endpoint=endpoints.SUPPLIERS,
        record_model=Supplier,
        input_model=SupplierInput,
        columns=("id", "name", "contactPerson", "phoneNumber", "email", "address"),
    )
)

CUSTOMERS = register_resource(
    Resource(
        name="customers",
        label="customer",
        base_path="/Customers",
        list_endpoint=endpoints.CUSTOMERS,
        record_model=Customer,
        input_model=CustomerInput,
        columns=("id", "customerName", "phoneNumber", "email", "address"),
    )
)

USERS = register_resource(
    Resource(
        name="users",
        label="user",
        base_path="/Auth",
        list_endpoint=endpoints.USERS,
        record_model=User,
        input_model=UserRegistrationInput,
        operations=frozenset({Operation.CREATE}),
        create_path=endpoints.USER_REGISTER_PATH,
        columns=("id", "fullName", "email", "userName", "roles"),
    )
)

STOCK_ALERTS = register_resource(
    Resource(
        name="stock-alerts",
        label="stock",
        base_path="/Sales/reorder-alerts",
        list_endpoint=endpoints.REORDER_ALERTS,
        record_model=StockAlert,
        operations=frozenset({Operation.ADD_STOCK}),
        id_field="productId",
        list_transform=lambda payload: payload.alerts,
        action_paths={Operation.ADD_STOCK: endpoints.add_quantity_path},
        action_models={Operation.ADD_STOCK: AddStockInput},
        columns=(
            "productId",
            "productName",
            "currentStock",
            "reorderPoint",
            "safetyStock",
            "leadTimeDays",
            "suggestedOrderQty",
            "urgencyLevel",
        ),
    )
)


def resource_view(session: Session, resource: Resource, notifier: Notifier | None = None) -> DataView:
    """List view for a registered resource."""
    loader = resource.list_loader or endpoint_loader(resource.list_endpoint, transform=resource.list_transform)
    return DataView(
        name=resource.name,
        session=session,
        loader=loader,
        notifier=notifier,
        error_title="Error",
    )
