"""Tests for entity ID parsing."""

import pytest

from tokobook.utils.id_parser import parse_entity_id


@pytest.mark.parametrize("ref, expected", [(1, 1), (42, 42), ("7", 7), (" 12 ", 12)])
def test_valid_ids(ref, expected):
    assert parse_entity_id(ref) == expected


@pytest.mark.parametrize(
    "ref", [None, "", "  ", "Toko ABC", "12a", "-3", 0, -1, "0", True, False, "²", "1.5"]
)
def test_names_and_invalid_ids(ref):
    assert parse_entity_id(ref) is None
