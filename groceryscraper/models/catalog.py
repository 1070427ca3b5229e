"""
Catalog data models.

Merchant-agnostic, immutable snapshots of categories, stores and items.
All price-like fields are integers in minor currency units (cents).
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Merchant(Enum):
    """Grocery chains with a catalog source."""
    IKI = 1


class MeasureUnit(Enum):
    """Unit a per-unit price refers to."""
    KILOGRAM = 1
    GRAM = 2
    LITER = 3
    MILLILITER = 4
    PIECE = 5
    METER = 6
    PACKAGE = 7


@dataclass(frozen=True)
class Category:
    """
    Category tree node.

    A category is a leaf iff it has no subcategories. Children are owned
    through ``subcategories``; the parent is referenced only by its ``id``.
    """
    internal_id: str
    name_lt: str
    merch: Merchant
    name_en: Optional[str] = None
    parent_category_id: Optional[str] = None
    subcategories: Tuple["Category", ...] = ()
    uri: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_on: datetime = field(default_factory=_now)
    modified_on: Optional[datetime] = None

    def __post_init__(self):
        if not self.internal_id:
            raise ValueError("Category internal_id is required")
        if not self.name_lt:
            raise ValueError("Category name_lt is required")

    @property
    def is_leaf(self) -> bool:
        return not self.subcategories


@dataclass(frozen=True)
class Store:
    """Physical store of a merchant. Only merch and internal_id are required."""
    internal_id: str
    merch: Merchant
    name: Optional[str] = None
    address: Optional[str] = None
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if not self.internal_id:
            raise ValueError("Store internal_id is required")


@dataclass(frozen=True)
class Item:
    """
    Product listing of a merchant.

    Field Groups:
    - Identity: internal_id (merge key), category_id (leaf category id)
    - Names: name_lt (required), name_en, description
    - Prices: price (required), discount_price, loyalty_price (cents)
    - Per-unit prices: derived from the prices and ammount (cents per unit)
    - Quantity: measure_unit, ammount (quantity per package)
    """

    internal_id: str
    name_lt: str
    price: int
    category_id: str
    merch: Merchant
    name_en: Optional[str] = None
    description: Optional[str] = None
    discount_price: Optional[int] = None
    loyalty_price: Optional[int] = None
    price_per_unit_of_measure: Optional[int] = None
    discount_price_per_unit_of_measure: Optional[int] = None
    loyalty_price_per_unit_of_measure: Optional[int] = None
    measure_unit: Optional[MeasureUnit] = None
    ammount: Optional[float] = None
    image: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_on: datetime = field(default_factory=_now)
    modified_on: Optional[datetime] = None

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.internal_id:
            raise ValueError("Item internal_id is required")
        if not self.name_lt:
            raise ValueError("Item name_lt is required")
        if not self.category_id:
            raise ValueError("Item category_id is required")
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError(f"Item price must be an integer in minor units, got {self.price!r}")


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Consistent, read-only view of one merchant's catalog.

    ``categories`` holds only leaf categories; ``all_categories`` holds
    every node of the tree, including those with subcategories.
    """
    merch: Merchant
    all_categories: Tuple[Category, ...] = ()
    categories: Tuple[Category, ...] = ()
    stores: Tuple[Store, ...] = ()
    items: Tuple[Item, ...] = ()
    taken_on: datetime = field(default_factory=_now)

    @property
    def roots(self) -> Tuple[Category, ...]:
        return tuple(c for c in self.all_categories if c.parent_category_id is None)

    def items_for(self, category: Category) -> List[Item]:
        """Items listed under a (leaf) category."""
        return [item for item in self.items if item.category_id == category.id]

    def items_by_internal_id(self) -> Dict[str, Item]:
        return {item.internal_id: item for item in self.items}
