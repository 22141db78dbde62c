"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount: str | int | float | Decimal) -> Decimal:
    """Parse a submitted amount into a Decimal.

    Handles JSON numbers as well as strings in various formats:
    - "15000"
    - "Rp15000" / "Rp 15,000"
    - "$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount: Amount as number or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount cannot be parsed
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount '{amount}'")

    if isinstance(amount, Decimal):
        return amount

    if isinstance(amount, int):
        return Decimal(amount)

    if isinstance(amount, float):
        # str() keeps the shortest repr, avoiding binary float noise
        return Decimal(str(amount))

    if amount is None or not str(amount).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount).strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"^(?:rp\.?|idr)", "", amount_str.strip(), flags=re.IGNORECASE)
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        value = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return -value if is_negative else value
