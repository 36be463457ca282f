"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from fintrack.domain.errors import InvalidArgumentError


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "€ 12"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        InvalidArgumentError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise InvalidArgumentError("Empty amount string")

    amount_str = re.sub(r"[$€£¥]", "", amount_str.strip())
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise InvalidArgumentError(f"Could not parse amount '{amount_str}'") from None
    if not amount.is_finite():
        raise InvalidArgumentError(f"Could not parse amount '{amount_str}'")
    return amount
