"""
Data models for catalog scraping.

This module contains pure data classes and tree traversal helpers.
"""

from .catalog import (
    CatalogSnapshot,
    Category,
    Item,
    Merchant,
    MeasureUnit,
    Store,
)
from .tree import find_category, iter_all, iter_leaves

__all__ = [
    'Merchant',
    'MeasureUnit',
    'Category',
    'Store',
    'Item',
    'CatalogSnapshot',
    'iter_leaves',
    'iter_all',
    'find_category',
]
