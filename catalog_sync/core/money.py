from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any


def to_minor_units(value: Any) -> int:
    """Decimal amount ("99.99", 99.99, Decimal) to integer minor units, half-up. None is 0."""
    if value is None or value == "":
        return 0
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid money amount: {value!r}")
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(value: int) -> str:
    """Integer minor units to a two-decimal string, the format Shopify expects for prices."""
    return str((Decimal(value or 0) / 100).quantize(Decimal("0.01")))
