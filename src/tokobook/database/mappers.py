"""Mapper functions to convert SQLAlchemy models into domain entities.

Embedded line items and attachments are child rows in the database but
tuples of value objects on the domain side.
"""

from decimal import Decimal

from tokobook.domain import entities as domain
from tokobook.database.models import (
    Abbreviation as ORMAbbreviation,
    Store as ORMStore,
    Product as ORMProduct,
    CatalogProduct as ORMCatalogProduct,
    Customer as ORMCustomer,
    Address as ORMAddress,
    Expense as ORMExpense,
    Order as ORMOrder,
)


def abbreviation_to_domain(orm_abbreviation: ORMAbbreviation) -> domain.Abbreviation:
    """Convert SQLAlchemy Abbreviation model to domain Abbreviation entity."""
    return domain.Abbreviation(id=orm_abbreviation.id, name=orm_abbreviation.name)


def store_to_domain(orm_store: ORMStore) -> domain.Store:
    """Convert SQLAlchemy Store model to domain Store entity."""
    return domain.Store(
        id=orm_store.id,
        name=orm_store.name,
        name_lowercase=orm_store.name_lowercase,
        address=orm_store.address,
        phone=orm_store.phone,
        maps_link=orm_store.maps_link,
        created_at=orm_store.created_at,
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        store_id=orm_product.store_id,
        name=orm_product.name,
        name_lowercase=orm_product.name_lowercase,
        price=orm_product.price,
        description=orm_product.description,
        created_at=orm_product.created_at,
    )


def catalog_product_to_domain(orm_product: ORMCatalogProduct) -> domain.CatalogProduct:
    """Convert SQLAlchemy CatalogProduct model to domain CatalogProduct entity."""
    return domain.CatalogProduct(
        id=orm_product.id,
        name=orm_product.name,
        name_lowercase=orm_product.name_lowercase,
        price=orm_product.price,
        description=orm_product.description,
        created_at=orm_product.created_at,
    )


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        name_lowercase=orm_customer.name_lowercase,
        phone=orm_customer.phone,
        created_at=orm_customer.created_at,
    )


def address_to_domain(orm_address: ORMAddress) -> domain.Address:
    """Convert SQLAlchemy Address model to domain Address entity."""
    return domain.Address(
        id=orm_address.id,
        customer_id=orm_address.customer_id,
        receiver_name=orm_address.receiver_name,
        phone=orm_address.phone,
        street=orm_address.street,
        landmark=orm_address.landmark,
        city=orm_address.city,
        state=orm_address.state,
        country=orm_address.country,
        postal_code=orm_address.postal_code,
        created_at=orm_address.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model (with children) to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        store_id=orm_expense.store_id,
        date=orm_expense.date,
        total=orm_expense.total,
        items=tuple(
            domain.ExpenseItem(
                product_id=item.product_id,
                name=item.name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in orm_expense.items
        ),
        attachments=tuple(attachment.path for attachment in orm_expense.attachments),
        thumbnail_path=orm_expense.thumbnail_path,
        created_at=orm_expense.created_at,
    )


def order_to_domain(orm_order: ORMOrder) -> domain.Order:
    """Convert SQLAlchemy Order model (with items) to domain Order entity."""
    return domain.Order(
        id=orm_order.id,
        customer_id=orm_order.customer_id,
        address_id=orm_order.address_id,
        order_date=orm_order.order_date,
        deadline=orm_order.deadline,
        items=tuple(
            domain.OrderItem(
                product_id=item.product_id,
                product_name=item.product_name,
                qty=item.qty,
                color=item.color,
                note=item.note,
                discount=item.discount if item.discount is not None else Decimal("0"),
            )
            for item in orm_order.items
        ),
        created_at=orm_order.created_at,
    )
