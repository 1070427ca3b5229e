"""
Unit of Measure Parsing

Maps merchant unit strings to MeasureUnit. Unknown strings map to None.
"""

from typing import Dict, Optional

from ..models import MeasureUnit

UNIT_ALIASES: Dict[str, MeasureUnit] = {
    'kg': MeasureUnit.KILOGRAM,
    'kilogram': MeasureUnit.KILOGRAM,
    'kilogramas': MeasureUnit.KILOGRAM,
    'g': MeasureUnit.GRAM,
    'gr': MeasureUnit.GRAM,
    'gram': MeasureUnit.GRAM,
    'gramas': MeasureUnit.GRAM,
    'l': MeasureUnit.LITER,
    'ltr': MeasureUnit.LITER,
    'liter': MeasureUnit.LITER,
    'litre': MeasureUnit.LITER,
    'litras': MeasureUnit.LITER,
    'ml': MeasureUnit.MILLILITER,
    'pcs': MeasureUnit.PIECE,
    'pc': MeasureUnit.PIECE,
    'unit': MeasureUnit.PIECE,
    'vnt': MeasureUnit.PIECE,
    'm': MeasureUnit.METER,
    'pack': MeasureUnit.PACKAGE,
    'pak': MeasureUnit.PACKAGE,
}


def parse_measure_unit(value: Optional[str]) -> Optional[MeasureUnit]:
    """
    Parse a unit of measure string.

    Matching ignores case, surrounding whitespace and a trailing dot
    ("Kg", " vnt. "). Never raises.

    Args:
        value: Raw unit string from the merchant (may be None)

    Returns:
        MeasureUnit, or None for unknown or missing units
    """
    if not isinstance(value, str):
        return None
    key = value.strip().lower().rstrip('.')
    return UNIT_ALIASES.get(key)
