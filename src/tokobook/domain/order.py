"""Order domain service."""

from datetime import date
from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.entities import (
    Address,
    Order as OrderEntity,
    OrderItem,
    OrderItemInput,
)
from tokobook.domain.errors import (
    NotFoundError,
    ValidationError,
    address_not_found,
    required_field,
)
from tokobook.domain.resolver import EntityResolver
from tokobook.logging import get_logger
from tokobook.utils.id_parser import parse_entity_id

LOG = get_logger("order")


class OrderService:
    """Service for recording customer orders."""

    def __init__(self, db: Database, resolver: EntityResolver):
        """Initialize order service.

        Args:
            db: Database instance
            resolver: Entity resolver for customers and catalog products
        """
        self.db = db
        self.resolver = resolver

    def create_order(
        self,
        customer: str | int,
        address_id: int,
        order_date: date,
        deadline: date,
        items: list[OrderItemInput],
        customer_label: Optional[str] = None,
    ) -> OrderEntity:
        """Record an order.

        The customer is looked up by ID or name and must own the address;
        neither is created here. Each product is resolved by ID or name and
        created when new.

        Args:
            customer: Customer ID or name
            address_id: Existing address ID
            order_date: Date the order was placed
            deadline: Date the order is due
            items: Line items; may be empty (callers enforce at least one)
            customer_label: Name to use when ``customer`` is not a known ID

        Returns:
            Created order entity

        Raises:
            NotFoundError: If the address doesn't exist
            ValidationError: If the address belongs to another customer, or an
                item has no name or a quantity below 1
        """
        address = self.db.get_address(address_id)
        if address is None:
            raise NotFoundError(address_not_found(address_id))

        for item in items:
            if not item.name or not str(item.name).strip():
                raise ValidationError(required_field("Product name"))
            if item.qty < 1:
                raise ValidationError(f"Quantity for '{item.name}' must be at least 1")

        customer_id = self._address_owner(address, customer, customer_label)

        built = []
        for item in items:
            product = item.product if item.product not in (None, "") else item.name
            resolution = self.resolver.resolve_catalog_product(product, item.name)
            built.append(
                OrderItem(
                    product_id=resolution.id,
                    product_name=item.name,
                    qty=item.qty,
                    color=item.color or None,
                    note=item.note or None,
                    discount=item.discount,
                )
            )

        order_id = self.db.create_order(
            customer_id=customer_id,
            address_id=address_id,
            order_date=order_date,
            deadline=deadline,
            items=built,
        )
        LOG.info("Created order %s for customer %s", order_id, customer_id)
        return self.db.get_order(order_id)

    def _address_owner(
        self, address: Address, customer: str | int, customer_label: Optional[str]
    ) -> int:
        """Return the ID of the referenced customer if it owns the address.

        A customer that doesn't exist yet cannot own an address, so nothing
        is created here. Among customers sharing a name, the one owning the
        address is taken.

        Raises:
            ValidationError: If no such customer owns the address
        """
        found = self.resolver.find_customer(customer, customer_label)
        matched_by_name = found is not None and found.id != parse_entity_id(customer)
        if matched_by_name and found.id != address.customer_id:
            owner = self.db.get_customer(address.customer_id)
            if owner is not None and owner.name_lowercase == found.name_lowercase:
                found = owner

        if found is None or found.id != address.customer_id:
            reference = found.id if found is not None else f"'{customer_label or customer}'"
            raise ValidationError(f"Address {address.id} does not belong to customer {reference}")
        return found.id

    def get_order(self, order_id: int) -> Optional[OrderEntity]:
        """Get order by ID."""
        return self.db.get_order(order_id)

    def list_orders(self, customer_id: Optional[int] = None) -> list[OrderEntity]:
        """List orders newest first, optionally for one customer."""
        return self.db.list_orders(customer_id=customer_id)
