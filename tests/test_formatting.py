"""Tests for display-name formatting."""

import pytest

from tokobook.domain.formatting import format_display_name


def test_known_abbreviation_keeps_canonical_casing():
    assert format_display_name("cemerlang tki", {"TKI"}) == "Cemerlang TKI"


def test_unregistered_all_caps_word_is_kept():
    assert format_display_name("cemerlang BDG", set()) == "Cemerlang BDG"


def test_empty_name():
    assert format_display_name("", {"TKI"}) == ""
    assert format_display_name(None) == ""


def test_title_cases_each_word():
    assert format_display_name("minyak GORENG bimoli") == "Minyak GORENG Bimoli"
    assert format_display_name("mInYaK goreng") == "Minyak Goreng"


def test_single_capital_letter_is_title_cased():
    """A lone capital is a normal word, not an abbreviation."""
    assert format_display_name("toko A") == "Toko A"
    assert format_display_name("a b") == "A B"


def test_collapses_whitespace():
    assert format_display_name("  toko   abc  ") == "Toko Abc"


def test_abbreviation_match_is_case_insensitive():
    assert format_display_name("Toko Tki Bandung", {"TKI"}) == "Toko TKI Bandung"


def test_mixed_case_abbreviation_uses_stored_casing():
    assert format_display_name("kopi ptpn", {"PTPN", "McD"}) == "Kopi PTPN"
    assert format_display_name("mcd sudirman", {"McD"}) == "McD Sudirman"


@pytest.mark.parametrize(
    "name",
    ["cemerlang tki", "Toko ABC", "minyak goreng 2L", "KOPI kapal api", "beras 5kg"],
)
def test_formatting_is_idempotent(name):
    abbreviations = {"TKI"}
    once = format_display_name(name, abbreviations)
    assert format_display_name(once, abbreviations) == once
