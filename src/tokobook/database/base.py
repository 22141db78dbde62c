"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Iterable
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from tokobook.domain.entities import (
    Abbreviation,
    Store,
    Product,
    CatalogProduct,
    Customer,
    Address,
    Expense,
    ExpenseItem,
    Order,
    OrderItem,
)


class Database(ABC):
    """Abstract database interface for tokobook.

    Create methods for entities with a natural key raise ConflictError when
    the unique constraint rejects the row.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Abbreviation operations
    @abstractmethod
    def create_abbreviation(self, name: str) -> int:
        """Create an abbreviation. Returns abbreviation ID."""
        pass

    @abstractmethod
    def list_abbreviations(self) -> list[Abbreviation]:
        """List all abbreviations."""
        pass

    # Store operations
    @abstractmethod
    def create_store(
        self,
        name: str,
        name_lowercase: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        maps_link: Optional[str] = None,
    ) -> int:
        """Create a store. Returns store ID."""
        pass

    @abstractmethod
    def get_store(self, store_id: int) -> Optional[Store]:
        """Get store by ID."""
        pass

    @abstractmethod
    def find_store_by_name(self, name_lowercase: str) -> Optional[Store]:
        """Get store by its lowercase name."""
        pass

    @abstractmethod
    def update_store_details(
        self,
        store_id: int,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        maps_link: Optional[str] = None,
    ) -> None:
        """Set contact details of a store; None leaves a field unchanged."""
        pass

    @abstractmethod
    def search_stores(self, name: str, limit: int = 10) -> list[Store]:
        """Case-insensitive substring search on store names."""
        pass

    @abstractmethod
    def get_stores(self, store_ids: Iterable[int]) -> dict[int, Store]:
        """Get stores by ID, keyed by ID. Missing IDs are absent from the result."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        store_id: int,
        name: str,
        name_lowercase: str,
        price: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Create a product under a store. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def find_product_by_name(self, store_id: int, name_lowercase: str) -> Optional[Product]:
        """Get a store's product by its lowercase name."""
        pass

    @abstractmethod
    def update_product_price(self, product_id: int, price: Decimal) -> None:
        """Overwrite a product's price."""
        pass

    @abstractmethod
    def search_products(self, name: str, store_id: int, limit: int = 10) -> list[Product]:
        """Case-insensitive substring search on a store's product names."""
        pass

    @abstractmethod
    def get_products(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """Get products by ID, keyed by ID."""
        pass

    # Catalog product operations
    @abstractmethod
    def create_catalog_product(
        self,
        name: str,
        name_lowercase: str,
        price: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a catalog product. Returns catalog product ID."""
        pass

    @abstractmethod
    def get_catalog_product(self, product_id: int) -> Optional[CatalogProduct]:
        """Get catalog product by ID."""
        pass

    @abstractmethod
    def find_catalog_product_by_name(self, name_lowercase: str) -> Optional[CatalogProduct]:
        """Get catalog product by its lowercase name."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(self, name: str, name_lowercase: str, phone: str = "") -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def find_customer_by_name(self, name_lowercase: str) -> Optional[Customer]:
        """Get the oldest customer with the given lowercase name."""
        pass

    @abstractmethod
    def search_customers(self, name: Optional[str] = None, limit: Optional[int] = None) -> list[Customer]:
        """List customers, optionally filtered by case-insensitive name substring."""
        pass

    @abstractmethod
    def get_customers(self, customer_ids: Iterable[int]) -> dict[int, Customer]:
        """Get customers by ID, keyed by ID."""
        pass

    # Address operations
    @abstractmethod
    def create_address(
        self,
        customer_id: int,
        receiver_name: str,
        phone: str,
        street: str,
        city: str,
        state: str,
        country: str,
        postal_code: str,
        landmark: Optional[str] = None,
    ) -> int:
        """Create an address. Returns address ID."""
        pass

    @abstractmethod
    def get_address(self, address_id: int) -> Optional[Address]:
        """Get address by ID."""
        pass

    @abstractmethod
    def list_addresses(self, customer_id: int) -> list[Address]:
        """List a customer's addresses."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        store_id: int,
        date: date,
        total: Decimal,
        items: list[ExpenseItem],
        attachments: Optional[list[str]] = None,
        thumbnail_path: Optional[str] = None,
    ) -> int:
        """Create an expense with its items. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def replace_expense(
        self,
        expense_id: int,
        store_id: int,
        date: date,
        total: Decimal,
        items: list[ExpenseItem],
        attachments: Optional[list[str]] = None,
        thumbnail_path: Optional[str] = None,
    ) -> None:
        """Replace every field of an expense, including its items and attachments."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    @abstractmethod
    def remove_expense_attachment(self, expense_id: int, path: str) -> None:
        """Remove an attachment path from an expense (no-op if not attached)."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        search: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        store_id: Optional[int] = None,
    ) -> list[Expense]:
        """List expenses, newest first.

        Args:
            search: Optional case-insensitive substring matched against the
                store name or any stored item name
            start_date: Optional start date filter
            end_date: Optional end date filter
            store_id: Optional store ID filter
        """
        pass

    # Order operations
    @abstractmethod
    def create_order(
        self,
        customer_id: int,
        address_id: int,
        order_date: date,
        deadline: date,
        items: list[OrderItem],
    ) -> int:
        """Create an order with its items. Returns order ID."""
        pass

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID."""
        pass

    @abstractmethod
    def list_orders(self, customer_id: Optional[int] = None) -> list[Order]:
        """List orders newest first, optionally for one customer."""
        pass
