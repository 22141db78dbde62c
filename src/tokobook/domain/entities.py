"""Domain model entities for tokobook.

These are pure data classes representing business concepts, independent of
database schema. Embedded line items are value objects owned by their
expense or order.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Abbreviation:
    """Known abbreviation kept upper-cased by display formatting."""

    id: int
    name: str


@dataclass(frozen=True)
class Store:
    """Store domain entity."""

    id: int
    name: str
    name_lowercase: str
    address: Optional[str] = None
    phone: Optional[str] = None
    maps_link: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Product:
    """Product sold by one store. Name is unique per store, case-insensitively."""

    id: int
    store_id: int
    name: str
    name_lowercase: str
    price: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CatalogProduct:
    """Product offered to customers on orders (not tied to a store)."""

    id: int
    name: str
    name_lowercase: str
    price: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Customer:
    """Customer domain entity."""

    id: int
    name: str
    name_lowercase: str
    phone: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Address:
    """Delivery address belonging to a customer."""

    id: int
    customer_id: int
    receiver_name: str
    phone: str
    street: str
    city: str
    state: str
    country: str
    postal_code: str
    landmark: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ExpenseItem:
    """Line item of an expense.

    ``name`` and ``price`` are a snapshot of what was bought; ``product_id``
    links to the live product record.
    """

    product_id: int
    name: str
    quantity: Decimal
    price: Decimal


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    store_id: int
    date: date
    total: Decimal
    items: tuple[ExpenseItem, ...] = ()
    attachments: tuple[str, ...] = ()
    thumbnail_path: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OrderItem:
    """Line item of an order with a snapshot of the product name."""

    product_id: int
    product_name: str
    qty: int
    color: Optional[str] = None
    note: Optional[str] = None
    discount: Decimal = Decimal("0")


@dataclass(frozen=True)
class Order:
    """Order domain entity."""

    id: int
    customer_id: int
    address_id: int
    order_date: date
    deadline: date
    items: tuple[OrderItem, ...] = ()
    created_at: Optional[datetime] = None


# Write-side inputs


@dataclass(frozen=True)
class ExpenseItemInput:
    """Submitted expense line item.

    ``product`` is an existing product ID or a free-text name; ``name`` is the
    label typed by the user.
    """

    product: str | int
    name: str
    quantity: Decimal
    price: Decimal


@dataclass(frozen=True)
class OrderItemInput:
    """Submitted order line item."""

    product: str | int
    name: str
    qty: int
    color: Optional[str] = None
    note: Optional[str] = None
    discount: Decimal = Decimal("0")


class ResolutionStatus(Enum):
    """Outcome of a find-or-create step."""

    EXISTING = "existing"
    CREATED = "created"


@dataclass(frozen=True)
class Resolution:
    """Tagged result of resolving a reference to a canonical entity."""

    id: int
    status: ResolutionStatus

    @property
    def created(self) -> bool:
        return self.status is ResolutionStatus.CREATED


# Read-side views


@dataclass(frozen=True)
class StoreView:
    id: int
    name: str


@dataclass(frozen=True)
class ProductView:
    id: int
    store_id: int
    name: str
    price: Decimal


@dataclass(frozen=True)
class ExpenseItemView:
    """Display form of an expense line item.

    ``name`` is the formatted live product name when the product still
    exists, otherwise the stored snapshot; ``stored_name`` is always the
    snapshot as persisted.
    """

    product_id: int
    name: str
    stored_name: str
    quantity: Decimal
    price: Decimal
    product: Optional[ProductView] = None


@dataclass(frozen=True)
class ExpenseView:
    """Expense joined to its store and products for display."""

    id: int
    date: date
    total: Decimal
    store: StoreView
    items: tuple[ExpenseItemView, ...] = ()
    attachments: tuple[str, ...] = ()
    thumbnail_path: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OrderView:
    """Order joined to its customer and address for display."""

    id: int
    customer_id: int
    customer_name: str
    order_date: date
    deadline: date
    address: Optional[Address] = None
    items: tuple[OrderItem, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
