"""Customer and address domain service."""

from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.entities import Address as AddressEntity, Customer as CustomerEntity
from tokobook.domain.errors import (
    NotFoundError,
    ValidationError,
    customer_not_found,
    required_field,
)
from tokobook.domain.formatting import format_display_name
from tokobook.domain.resolver import normalize_label

ADDRESS_REQUIRED_FIELDS = (
    "receiver_name",
    "phone",
    "street",
    "city",
    "state",
    "country",
    "postal_code",
)


class CustomerService:
    """Service for managing customers and their delivery addresses."""

    def __init__(self, db: Database, abbreviations: AbbreviationRegistry):
        """Initialize customer service.

        Args:
            db: Database instance
            abbreviations: Registry used to format customer names
        """
        self.db = db
        self.abbreviations = abbreviations

    def create_customer(self, name: str, phone: str = "") -> CustomerEntity:
        """Create a customer.

        Customers are not unique by name; two customers may share a name.

        Raises:
            ValidationError: If name is empty
        """
        label = normalize_label(name, "Customer")
        customer_id = self.db.create_customer(
            name=format_display_name(label, self.abbreviations.get_all()),
            name_lowercase=label.lower(),
            phone=(phone or "").strip(),
        )
        return self.db.get_customer(customer_id)

    def get_customer(self, customer_id: int) -> Optional[CustomerEntity]:
        """Get customer by ID."""
        return self.db.get_customer(customer_id)

    def search_customers(self, name: Optional[str] = None) -> list[CustomerEntity]:
        """List customers whose name contains ``name`` (all when omitted)."""
        return self.db.search_customers(name=name or None)

    def create_address(self, customer_id: int, **fields: Optional[str]) -> AddressEntity:
        """Create an address for an existing customer.

        Args:
            customer_id: Owning customer ID
            **fields: receiver_name, phone, street, city, state, country,
                postal_code (required) and landmark (optional)

        Raises:
            NotFoundError: If the customer doesn't exist
            ValidationError: If a required field is missing
        """
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        cleaned = {key: (value or "").strip() for key, value in fields.items()}
        for field_name in ADDRESS_REQUIRED_FIELDS:
            if not cleaned.get(field_name):
                raise ValidationError(required_field(field_name))

        address_id = self.db.create_address(
            customer_id=customer_id,
            receiver_name=cleaned["receiver_name"],
            phone=cleaned["phone"],
            street=cleaned["street"],
            landmark=cleaned.get("landmark") or None,
            city=cleaned["city"],
            state=cleaned["state"],
            country=cleaned["country"],
            postal_code=cleaned["postal_code"],
        )
        return self.db.get_address(address_id)

    def list_addresses(self, customer_id: int) -> list[AddressEntity]:
        """List a customer's addresses."""
        return self.db.list_addresses(customer_id)
