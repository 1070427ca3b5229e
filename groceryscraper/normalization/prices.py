"""
Price Normalization

Converts decimal currency values to integer minor units and derives
per-unit prices.

Rounding rule: ROUND_HALF_UP applied to the decimal text of the value,
so 1.995 -> 200 and 0.005 -> 1 even though the binary floats lie slightly
below the half.
"""

import dataclasses
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from ..common.constants import MINOR_UNITS_PER_MAJOR
from ..models import Item

Number = Union[int, float, Decimal, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        # str() of a float is its shortest round-tripping repr ("1.995")
        result = Decimal(str(value).strip().replace(',', '.'))
    except InvalidOperation:
        raise ValueError(f"Not a numeric value: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not a finite value: {value!r}")
    return result


def _round_half_up(value: Decimal) -> int:
    try:
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # More integer digits than the decimal context precision
        raise ValueError(f"Value out of range: {value}") from None


def to_minor_units(value: Optional[Number]) -> Optional[int]:
    """
    Convert a currency amount to minor units.

    Args:
        value: Amount in major units (e.g., 1.99), or None

    Returns:
        Amount in minor units (e.g., 199), or None if value is None

    Raises:
        ValueError: If value is not numeric or too large to represent
    """
    if value is None:
        return None
    return _round_half_up(_to_decimal(value) * MINOR_UNITS_PER_MAJOR)


def per_unit_price(price: Optional[int], amount: Optional[float]) -> Optional[int]:
    """
    Price per one unit of measure, in minor units.

    Returns None when price or amount is absent, amount is not positive,
    or the result is out of range.
    """
    if price is None or amount is None:
        return None
    try:
        divisor = _to_decimal(amount)
    except ValueError:
        return None
    if divisor <= 0:
        return None
    try:
        return _round_half_up(Decimal(price) / divisor)
    except ValueError:
        return None


def fill_per_unit_prices(item: Item) -> Item:
    """Return a copy of item with the three per-unit price fields derived."""
    return dataclasses.replace(
        item,
        price_per_unit_of_measure=per_unit_price(item.price, item.ammount),
        discount_price_per_unit_of_measure=per_unit_price(item.discount_price, item.ammount),
        loyalty_price_per_unit_of_measure=per_unit_price(item.loyalty_price, item.ammount),
    )
