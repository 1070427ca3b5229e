"""
JSON Feed Exporter

Writes a catalog snapshot as a single JSON document. The "shopItems" key
holds the flat item list the app-side item service loads.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models import CatalogSnapshot, Category, Item, Store

logger = logging.getLogger(__name__)


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def item_to_dict(item: Item) -> Dict[str, Any]:
    return {
        "id": item.id,
        "internalId": item.internal_id,
        "merch": item.merch.name,
        "categoryId": item.category_id,
        "nameLT": item.name_lt,
        "nameEN": item.name_en,
        "description": item.description,
        "price": item.price,
        "discountPrice": item.discount_price,
        "loyaltyPrice": item.loyalty_price,
        "pricePerUnitOfMeasure": item.price_per_unit_of_measure,
        "discountPricePerUnitOfMeasure": item.discount_price_per_unit_of_measure,
        "loyaltyPricePerUnitOfMeasure": item.loyalty_price_per_unit_of_measure,
        "measureUnit": item.measure_unit.name if item.measure_unit else None,
        "ammount": item.ammount,
        "image": item.image,
        "createdOn": _timestamp(item.created_on),
        "modifiedOn": _timestamp(item.modified_on),
    }


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Category with its subcategories nested."""
    return {
        "id": category.id,
        "internalId": category.internal_id,
        "merch": category.merch.name,
        "nameLT": category.name_lt,
        "nameEN": category.name_en,
        "categoryId": category.parent_category_id,
        "subCategories": [category_to_dict(sub) for sub in category.subcategories],
    }


def store_to_dict(store: Store) -> Dict[str, Any]:
    return {
        "id": store.id,
        "internalId": store.internal_id,
        "merch": store.merch.name,
        "name": store.name,
        "address": store.address,
        "longitude": store.longitude,
        "latitude": store.latitude,
    }


def snapshot_to_dict(snapshot: CatalogSnapshot) -> Dict[str, Any]:
    return {
        "merch": snapshot.merch.name,
        "takenOn": _timestamp(snapshot.taken_on),
        "shopItems": [item_to_dict(item) for item in snapshot.items],
        "categories": [category_to_dict(root) for root in snapshot.roots],
        "stores": [store_to_dict(store) for store in snapshot.stores],
    }


def export_json(snapshot: CatalogSnapshot, path: Union[str, Path]) -> Path:
    """
    Write snapshot to a JSON file, creating parent directories.

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2, ensure_ascii=False)

    logger.info("Saved %d items to %s", len(snapshot.items), path)
    return path
