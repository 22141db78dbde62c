"""Abbreviation registry."""

import re
from typing import Optional

from tokobook.database.base import Database
from tokobook.domain.errors import ConflictError, ValidationError, required_field
from tokobook.logging import get_logger

LOG = get_logger("abbreviation")

# Tokens in store names that are learned as abbreviations, e.g. "TKI", "BDG"
ABBREVIATION_TOKEN = re.compile(r"^[A-Z]{2,5}$")


class AbbreviationRegistry:
    """Read-through cache over the stored abbreviations.

    The cache is filled on the first ``get_all()`` and is never invalidated by
    ``register()``: abbreviations added afterwards become visible only after
    ``refresh()`` (or in a new process).
    """

    def __init__(self, db: Database):
        """Initialize abbreviation registry.

        Args:
            db: Database instance
        """
        self.db = db
        self._cache: Optional[frozenset[str]] = None

    def get_all(self) -> frozenset[str]:
        """Return the known abbreviations in their stored casing."""
        if self._cache is None:
            self._cache = frozenset(a.name for a in self.db.list_abbreviations())
        return self._cache

    def refresh(self) -> None:
        """Drop the cache so the next ``get_all()`` reads storage again."""
        self._cache = None

    def register(self, candidate: str) -> bool:
        """Store an abbreviation, upper-cased.

        Duplicates are ignored.

        Args:
            candidate: Abbreviation text

        Returns:
            True if a new abbreviation was stored, False if it already existed

        Raises:
            ValidationError: If candidate is empty
        """
        name = (candidate or "").strip().upper()
        if not name:
            raise ValidationError(required_field("Abbreviation name"))

        try:
            self.db.create_abbreviation(name)
        except ConflictError:
            return False
        LOG.info("Registered abbreviation %s", name)
        return True

    def learn_from_name(self, name: str) -> list[str]:
        """Register every 2-5 letter all-caps token of a store name.

        Args:
            name: Store name as submitted

        Returns:
            Newly stored abbreviations
        """
        learned = []
        for token in (name or "").split():
            if ABBREVIATION_TOKEN.match(token) and self.register(token):
                learned.append(token)
        return learned

    def list_abbreviations(self) -> list[str]:
        """List stored abbreviations, bypassing the cache."""
        return [a.name for a in self.db.list_abbreviations()]
