from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def parse_quantity(value: Any) -> int:
    """
    Parse an on-chain quantity: int, hex string ("0x5208") or decimal string.

    Raises ValueError for anything else, including bools and negative numbers.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip().lower()
        try:
            number = int(text, 16) if text.startswith("0x") else int(text)
        except ValueError:
            raise ValueError(f"Invalid quantity: {value!r}") from None
    else:
        raise ValueError(f"Invalid quantity: {value!r}")

    if number < 0:
        raise ValueError(f"Invalid quantity: {value!r}")
    return number


def parse_decimal(value: Any) -> Decimal:
    """Parse a price-feed number (int, float or numeric string) into a Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid decimal: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Invalid decimal: {value!r}") from None
    elif isinstance(value, float):
        # repr keeps the shortest round-tripping digits (0.1 -> "0.1")
        result = Decimal(repr(value))
    else:
        raise ValueError(f"Invalid decimal: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Invalid decimal: {value!r}")
    return result
