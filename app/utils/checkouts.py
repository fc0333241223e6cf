"""
Checkout list helpers.

Checkouts are stored as a ", "-joined string ("16, 24, 32") and handed to
the statistics layer as a list of positive integers.
"""

from typing import Any

CHECKOUT_SEPARATOR = ", "


def join_checkouts(values: list[int] | None) -> str | None:
    """Join checkout values for storage; an empty list stores as None."""
    if not values:
        return None
    return CHECKOUT_SEPARATOR.join(str(v) for v in values)


def parse_checkout_value(value: Any) -> int | None:
    """Parse a single checkout entry. Returns None for empty, zero, negative or junk."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    else:
        text = str(value).strip()
        if not text.isdigit():
            return None
        number = int(text)
    return number if number > 0 else None


def parse_checkouts(value: str | list | None) -> list[int]:
    """
    Parse stored or provider checkouts into a list of positive integers.

    Accepts the joined storage form as well as a list of ints/strings.
    Unparsable and non-positive entries are dropped, order is kept.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        parts = [value]

    result = []
    for part in parts:
        number = parse_checkout_value(part)
        if number is not None:
            result.append(number)
    return result
