"""Utility for telling entity IDs apart from free-text names."""

from typing import Optional


def parse_entity_id(ref: str | int | None) -> Optional[int]:
    """Return ``ref`` as an entity ID if it is syntactically one.

    Args:
        ref: Integer ID, string representation of one, or a free-text name

    Returns:
        Positive integer ID, or None when ``ref`` should be treated as a name
    """
    if ref is None or isinstance(ref, bool):
        return None

    if isinstance(ref, int):
        return ref if ref > 0 else None

    text = str(ref).strip()
    # isdigit() also accepts non-ASCII digits such as superscripts
    if not text or not text.isascii() or not text.isdigit():
        return None

    value = int(text)
    return value if value > 0 else None
