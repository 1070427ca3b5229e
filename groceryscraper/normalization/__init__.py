"""
Normalization utilities.

Pure, stateless transforms from raw merchant values to the catalog model.

Modules:
    prices - Currency to minor units, per-unit price derivation
    units  - Unit of measure string parsing
    images - Image URL parsing with fallback fields
"""

from .images import first_valid_url, parse_image_url
from .prices import fill_per_unit_prices, per_unit_price, to_minor_units
from .units import parse_measure_unit

__all__ = [
    'to_minor_units',
    'per_unit_price',
    'fill_per_unit_prices',
    'parse_measure_unit',
    'parse_image_url',
    'first_valid_url',
]
