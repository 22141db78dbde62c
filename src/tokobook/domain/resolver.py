"""Entity resolution: map a free-text name or an ID to a canonical record.

Every reference is resolved in the same order, stopping at the first hit:

1. If the reference is a syntactically valid ID, look the entity up by ID
   (for products, only within the expected store).
2. Look the entity up by its lowercase name (products within the store;
   stores, customers and catalog products globally).
3. Create the entity with a display-formatted name.

Step 3 can lose a race against a concurrent request creating the same name;
the unique constraint then rejects the insert and step 2 is retried instead
of failing the caller.
"""

from decimal import Decimal
from typing import Any, Callable, Optional

from tokobook.database.base import Database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.entities import Customer, Resolution, ResolutionStatus
from tokobook.domain.errors import ConflictError, ValidationError, required_field
from tokobook.domain.formatting import format_display_name
from tokobook.logging import get_logger
from tokobook.utils.id_parser import parse_entity_id

LOG = get_logger("resolver")


def normalize_label(label: Optional[str], kind: str) -> str:
    """Return the trimmed label, rejecting empty ones.

    Raises:
        ValidationError: If label is missing or blank
    """
    text = str(label).strip() if label is not None else ""
    if not text:
        raise ValidationError(required_field(f"{kind} name"))
    return text


class EntityResolver:
    """Find-or-create resolution for stores, products, customers and catalog products."""

    def __init__(self, db: Database, abbreviations: AbbreviationRegistry):
        """Initialize entity resolver.

        Args:
            db: Database instance
            abbreviations: Registry used to format names of new entities
        """
        self.db = db
        self.abbreviations = abbreviations

    def _display_name(self, label: str) -> str:
        return format_display_name(label, self.abbreviations.get_all())

    def _find(
        self,
        kind: str,
        ref: str | int | None,
        label: Optional[str],
        find_by_id: Callable[[int], Any],
        find_by_name: Callable[[str], Any],
    ) -> tuple[Any, Optional[str]]:
        """Run the lookup steps without writing anything.

        Returns:
            The matched entity (or None) and the normalized label, which is
            None when the entity was found by ID
        """
        entity_id = parse_entity_id(ref)
        if entity_id is not None:
            entity = find_by_id(entity_id)
            if entity is not None:
                return entity, None

        name = normalize_label(label, kind)
        return find_by_name(name.lower()), name

    def _find_or_create(
        self,
        kind: str,
        ref: str | int | None,
        label: Optional[str],
        find_by_id: Callable[[int], Any],
        find_by_name: Callable[[str], Any],
        create: Callable[[str, str], int],
    ) -> tuple[Resolution, Any]:
        """Run the three resolution steps.

        Returns:
            The resolution and the matched entity (None when created)
        """
        entity, name = self._find(kind, ref, label, find_by_id, find_by_name)
        if entity is not None:
            return Resolution(entity.id, ResolutionStatus.EXISTING), entity

        name_lowercase = name.lower()

        try:
            new_id = create(name, name_lowercase)
        except ConflictError:
            entity = find_by_name(name_lowercase)
            if entity is None:
                raise
            LOG.info("%s '%s' was created concurrently; using ID %s", kind, name, entity.id)
            return Resolution(entity.id, ResolutionStatus.EXISTING), entity

        LOG.info("Created %s '%s' (ID: %s)", kind.lower(), name, new_id)
        return Resolution(new_id, ResolutionStatus.CREATED), None

    def resolve_store(self, ref: str | int | None, label: Optional[str] = None) -> Resolution:
        """Resolve a store ID or name.

        All-caps tokens of a new store's name are registered as abbreviations.

        Args:
            ref: Store ID or store name
            label: Name to use when ``ref`` is not a known ID (defaults to ``ref``)

        Returns:
            Resolution with the store ID
        """
        if label is None and ref is not None:
            label = str(ref)

        def create(name: str, name_lowercase: str) -> int:
            self.abbreviations.learn_from_name(name)
            return self.db.create_store(name=self._display_name(name), name_lowercase=name_lowercase)

        resolution, _ = self._find_or_create(
            "Store", ref, label, self.db.get_store, self.db.find_store_by_name, create
        )
        return resolution

    def resolve_product(
        self,
        ref: str | int | None,
        label: Optional[str],
        store_id: int,
        price: Optional[Decimal] = None,
    ) -> Resolution:
        """Resolve a product within a store.

        A product ID belonging to another store is ignored and resolution
        falls through to the name lookup. When an existing product is matched
        and ``price`` differs from its stored price, the stored price is
        overwritten (last purchase price wins).

        Args:
            ref: Product ID or name
            label: Product name as typed for this purchase
            store_id: Store the product must belong to
            price: Price paid; also the price of a newly created product

        Returns:
            Resolution with the product ID
        """
        if label is None and ref is not None and parse_entity_id(ref) is None:
            label = str(ref)

        def find_by_id(product_id: int):
            product = self.db.get_product(product_id)
            if product is not None and product.store_id != store_id:
                return None
            return product

        def create(name: str, name_lowercase: str) -> int:
            return self.db.create_product(
                store_id=store_id,
                name=self._display_name(name),
                name_lowercase=name_lowercase,
                price=price if price is not None else Decimal("0"),
            )

        resolution, product = self._find_or_create(
            "Product",
            ref,
            label,
            find_by_id,
            lambda name_lowercase: self.db.find_product_by_name(store_id, name_lowercase),
            create,
        )

        if product is not None and price is not None and price != product.price:
            LOG.info(
                "Updating price of product %s from %s to %s", product.id, product.price, price
            )
            self.db.update_product_price(product.id, price)

        return resolution

    def resolve_customer(self, ref: str | int | None, label: Optional[str] = None) -> Resolution:
        """Resolve a customer ID or name (case-insensitive exact match).

        Args:
            ref: Customer ID or name
            label: Name to use when ``ref`` is not a known ID (defaults to ``ref``)

        Returns:
            Resolution with the customer ID
        """
        if label is None and ref is not None:
            label = str(ref)

        def create(name: str, name_lowercase: str) -> int:
            return self.db.create_customer(
                name=self._display_name(name), name_lowercase=name_lowercase, phone=""
            )

        resolution, _ = self._find_or_create(
            "Customer", ref, label, self.db.get_customer, self.db.find_customer_by_name, create
        )
        return resolution

    def find_customer(self, ref: str | int | None, label: Optional[str] = None) -> Optional[Customer]:
        """Look a customer up by ID or name without creating one."""
        if label is None and ref is not None:
            label = str(ref)
        customer, _ = self._find(
            "Customer", ref, label, self.db.get_customer, self.db.find_customer_by_name
        )
        return customer

    def resolve_catalog_product(self, ref: str | int | None, label: Optional[str] = None) -> Resolution:
        """Resolve a catalog product ID or name for an order line.

        Args:
            ref: Catalog product ID or name
            label: Product name as shown on the order (defaults to ``ref``)

        Returns:
            Resolution with the catalog product ID
        """
        if label is None and ref is not None:
            label = str(ref)

        def create(name: str, name_lowercase: str) -> int:
            return self.db.create_catalog_product(
                name=self._display_name(name), name_lowercase=name_lowercase
            )

        resolution, _ = self._find_or_create(
            "Catalog product",
            ref,
            label,
            self.db.get_catalog_product,
            self.db.find_catalog_product_by_name,
            create,
        )
        return resolution
