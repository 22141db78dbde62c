"""Utility functions for tokobook."""

from tokobook.utils.date_parser import parse_date
from tokobook.utils.amount_parser import parse_amount
from tokobook.utils.id_parser import parse_entity_id

__all__ = ["parse_date", "parse_amount", "parse_entity_id"]
