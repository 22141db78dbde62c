"""SQLAlchemy models for tokobook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Abbreviation(Base):
    """Abbreviation kept in its stored casing when formatting names."""

    __tablename__ = "abbreviations"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)


class Store(Base):
    """Store model; ``name_lowercase`` is the natural key."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_lowercase = Column(String, unique=True, nullable=False, index=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    maps_link = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="store")
    expenses = relationship("Expense", back_populates="store")


class Product(Base):
    """Product model scoped to a store."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    name = Column(String, nullable=False)
    name_lowercase = Column(String, nullable=False)
    price = Column(Numeric(14, 2), nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Same product name may exist independently under different stores
    __table_args__ = (
        UniqueConstraint("store_id", "name_lowercase", name="uq_product_store_name"),
    )

    # Relationships
    store = relationship("Store", back_populates="products")


class CatalogProduct(Base):
    """Product offered on customer orders."""

    __tablename__ = "catalog_products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_lowercase = Column(String, unique=True, nullable=False, index=True)
    price = Column(Numeric(14, 2), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Customer(Base):
    """Customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    name_lowercase = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    addresses = relationship("Address", back_populates="customer")


class Address(Base):
    """Delivery address model."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    receiver_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    street = Column(String, nullable=False)
    landmark = Column(String, nullable=True)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    country = Column(String, nullable=False)
    postal_code = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="addresses")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    date = Column(Date, nullable=False)
    total = Column(Numeric(14, 2), nullable=False)
    thumbnail_path = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    store = relationship("Store", back_populates="expenses")
    items = relationship(
        "ExpenseItem",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseItem.position",
    )
    attachments = relationship(
        "ExpenseAttachment",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseAttachment.position",
    )


class ExpenseItem(Base):
    """Expense line item; ``name`` and ``price`` are a purchase-time snapshot."""

    __tablename__ = "expense_items"

    id = Column(Integer, primary_key=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False)
    price = Column(Numeric(14, 2), nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="items")


class ExpenseAttachment(Base):
    """Public path of a file attached to an expense."""

    __tablename__ = "expense_attachments"

    id = Column(Integer, primary_key=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    path = Column(String, nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="attachments")


class Order(Base):
    """Customer order model."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)
    order_date = Column(Date, nullable=False)
    deadline = Column(Date, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    """Order line item with a snapshot of the product name."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("catalog_products.id"), nullable=False)
    product_name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    note = Column(String, nullable=True)
    qty = Column(Integer, nullable=False)
    discount = Column(Numeric(14, 2), nullable=False, default=0)

    # Relationships
    order = relationship("Order", back_populates="items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory, creating tables as needed."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # TestClient runs the app on its own portal thread
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
