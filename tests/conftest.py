"""Shared pytest fixtures for tokobook tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from tokobook.config import Settings
from tokobook.database.factories import create_sqlite_database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.customer import CustomerService
from tokobook.domain.entities import ExpenseItemInput
from tokobook.domain.expense import ExpenseService
from tokobook.domain.listing import ExpenseQueryService, OrderQueryService
from tokobook.domain.order import OrderService
from tokobook.domain.resolver import EntityResolver
from tokobook.domain.store import StoreService
from tokobook.storage.attachments import AttachmentStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def abbreviations(temp_db):
    """Create an AbbreviationRegistry with a temporary database."""
    return AbbreviationRegistry(temp_db)


@pytest.fixture
def resolver(temp_db, abbreviations):
    """Create an EntityResolver with a temporary database."""
    return EntityResolver(temp_db, abbreviations)


@pytest.fixture
def upload_dir(tmp_path):
    """Directory holding uploaded attachments."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def attachment_store(upload_dir):
    """Create an AttachmentStore rooted in a temporary directory."""
    return AttachmentStore(upload_dir)


@pytest.fixture
def expense_service(temp_db, resolver, attachment_store):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db, resolver, attachment_store)


@pytest.fixture
def expense_queries(temp_db, abbreviations):
    """Create an ExpenseQueryService with a temporary database."""
    return ExpenseQueryService(temp_db, abbreviations)


@pytest.fixture
def store_service(temp_db, resolver, abbreviations):
    """Create a StoreService with a temporary database."""
    return StoreService(temp_db, resolver, abbreviations)


@pytest.fixture
def customer_service(temp_db, abbreviations):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db, abbreviations)


@pytest.fixture
def order_service(temp_db, resolver):
    """Create an OrderService with a temporary database."""
    return OrderService(temp_db, resolver)


@pytest.fixture
def order_queries(temp_db, abbreviations):
    """Create an OrderQueryService with a temporary database."""
    return OrderQueryService(temp_db, abbreviations)


@pytest.fixture
def sample_expense(expense_service):
    """Record an expense at 'Toko ABC' with one item."""
    return expense_service.create_expense(
        store="Toko ABC",
        items=[
            ExpenseItemInput(
                product="Minyak Goreng",
                name="Minyak Goreng",
                quantity=Decimal("2"),
                price=Decimal("15000"),
            )
        ],
        date=date(2024, 1, 1),
        total=Decimal("30000"),
    )


@pytest.fixture
def sample_customer(customer_service):
    """Create a customer with one address."""
    customer = customer_service.create_customer("budi santoso", phone="08123")
    address = customer_service.create_address(
        customer.id,
        receiver_name="Budi",
        phone="08123",
        street="Jl. Merdeka 1",
        city="Bandung",
        state="Jawa Barat",
        country="Indonesia",
        postal_code="40111",
    )
    return customer, address


@pytest.fixture
def settings(temp_db, upload_dir):
    """Settings pointing at the temporary database and upload directory."""
    return Settings(database_path=temp_db.database_path, upload_dir=upload_dir)


@pytest.fixture
def client(temp_db, settings):
    """Starlette test client for the API."""
    from starlette.testclient import TestClient

    from tokobook.api.app import create_app

    with TestClient(create_app(db=temp_db, settings=settings)) as test_client:
        yield test_client


@pytest.fixture
def cli_runner(monkeypatch, upload_dir):
    """Create a Click test runner."""
    from click.testing import CliRunner

    monkeypatch.setenv("TOKOBOOK_UPLOAD_DIR", str(upload_dir))
    return CliRunner()
