"""Display-name formatting.

Turns free-text names into their display form: title case per word, except
that known abbreviations are emitted in their stored casing and unregistered
all-caps words (longer than one letter) are left alone.

    >>> format_display_name("cemerlang tki", {"TKI"})
    'Cemerlang TKI'
    >>> format_display_name("cemerlang BDG", set())
    'Cemerlang BDG'
"""

from typing import Iterable, Optional


def format_display_name(name: Optional[str], abbreviations: Iterable[str] = ()) -> str:
    """Format a name for display.

    Args:
        name: Raw name as typed or stored
        abbreviations: Known abbreviations in their canonical casing

    Returns:
        Display name with words joined by single spaces, or "" for empty input
    """
    if not name:
        return ""

    canonical = {}
    for abbreviation in abbreviations:
        canonical.setdefault(abbreviation.lower(), abbreviation)

    return " ".join(_format_word(word, canonical) for word in name.split())


def _format_word(word: str, canonical: dict[str, str]) -> str:
    known = canonical.get(word.lower())
    if known is not None:
        return known

    # Unregistered all-caps token, e.g. a city code
    if len(word) > 1 and word.isupper():
        return word

    return word[:1].upper() + word[1:].lower()
