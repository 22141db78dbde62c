"""Store and product lookup service."""

from dataclasses import replace
from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.abbreviation import AbbreviationRegistry
from tokobook.domain.entities import Product as ProductEntity, Resolution, Store as StoreEntity
from tokobook.domain.formatting import format_display_name
from tokobook.domain.resolver import EntityResolver

AUTOCOMPLETE_LIMIT = 10


class StoreService:
    """Service for creating stores and searching stores and products."""

    def __init__(self, db: Database, resolver: EntityResolver, abbreviations: AbbreviationRegistry):
        """Initialize store service.

        Args:
            db: Database instance
            resolver: Entity resolver used for store creation
            abbreviations: Registry used to format names in results
        """
        self.db = db
        self.resolver = resolver
        self.abbreviations = abbreviations

    def create_store(
        self,
        name: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        maps_link: Optional[str] = None,
    ) -> tuple[StoreEntity, Resolution]:
        """Find or create a store by name.

        Contact details are only recorded on a newly created store; an
        existing store is returned unchanged.

        Returns:
            The store and whether it was created
        """
        resolution = self.resolver.resolve_store(None, name)
        if resolution.created and (address or phone or maps_link):
            self.db.update_store_details(
                resolution.id, address=address, phone=phone, maps_link=maps_link
            )
        return self.db.get_store(resolution.id), resolution

    def get_store(self, store_id: int) -> Optional[StoreEntity]:
        """Get store by ID."""
        return self.db.get_store(store_id)

    def search_stores(self, name: str, limit: int = AUTOCOMPLETE_LIMIT) -> list[StoreEntity]:
        """Case-insensitive substring search on store names, for autocomplete."""
        abbreviations = self.abbreviations.get_all()
        return [
            replace(store, name=format_display_name(store.name, abbreviations))
            for store in self.db.search_stores(name, limit=limit)
        ]

    def search_products(
        self, name: str, store_id: int, limit: int = AUTOCOMPLETE_LIMIT
    ) -> list[ProductEntity]:
        """Case-insensitive substring search on one store's products, for autocomplete."""
        abbreviations = self.abbreviations.get_all()
        return [
            replace(product, name=format_display_name(product.name, abbreviations))
            for product in self.db.search_products(name, store_id=store_id, limit=limit)
        ]

    def get_product(self, product_id: int) -> Optional[ProductEntity]:
        """Get product by ID."""
        return self.db.get_product(product_id)
