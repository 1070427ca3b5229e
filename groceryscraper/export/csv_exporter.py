"""
Catalog CSV Exporter

Exports a catalog snapshot to one CSV file per table, using the column
names of the relational schema (Categories, Items, Stores). Unset values
are written as empty cells.
"""

import csv
import logging
import os
from typing import Dict, List, Optional

from ..models import CatalogSnapshot, Category, Item, Store

logger = logging.getLogger(__name__)

CATEGORY_FIELDNAMES = [
    'Id', 'InternalID', 'NameEN', 'NameLT', 'Merch', 'CategoryId',
    'CreatedOn', 'ModifiedOn', 'Uri',
]

ITEM_FIELDNAMES = [
    'Id', 'InternalID', 'NameEN', 'NameLT', 'Description',
    'Price', 'DiscountPrice', 'LoyaltyPrice',
    'PricePerUnitOfMeasure', 'DiscountPricePerUnitOfMeasure', 'LoyaltyPricePerUnitOfMeasure',
    'MeasureUnit', 'Ammount', 'Merch', 'CategoryId', 'CreatedOn', 'ModifiedOn', 'Image',
]

STORE_FIELDNAMES = [
    'Id', 'InternalID', 'Merch', 'Name', 'Address', 'Longitude', 'Latitude',
]


def _cell(value) -> str:
    if value is None:
        return ''
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return str(value)


class CatalogCSVExporter:
    """
    Exports a snapshot to categories.csv, items.csv and stores.csv.

    Usage:
        exporter = CatalogCSVExporter()
        exporter.export(snapshot, "output/iki")
    """

    def category_to_row(self, category: Category) -> Dict[str, str]:
        return {
            'Id': category.id,
            'InternalID': category.internal_id,
            'NameEN': _cell(category.name_en),
            'NameLT': category.name_lt,
            'Merch': category.merch.name,
            'CategoryId': _cell(category.parent_category_id),
            'CreatedOn': _cell(category.created_on),
            'ModifiedOn': _cell(category.modified_on),
            'Uri': _cell(category.uri),
        }

    def item_to_row(self, item: Item) -> Dict[str, str]:
        return {
            'Id': item.id,
            'InternalID': item.internal_id,
            'NameEN': _cell(item.name_en),
            'NameLT': item.name_lt,
            'Description': _cell(item.description),
            'Price': str(item.price),
            'DiscountPrice': _cell(item.discount_price),
            'LoyaltyPrice': _cell(item.loyalty_price),
            'PricePerUnitOfMeasure': _cell(item.price_per_unit_of_measure),
            'DiscountPricePerUnitOfMeasure': _cell(item.discount_price_per_unit_of_measure),
            'LoyaltyPricePerUnitOfMeasure': _cell(item.loyalty_price_per_unit_of_measure),
            'MeasureUnit': item.measure_unit.name if item.measure_unit else '',
            'Ammount': _cell(item.ammount),
            'Merch': item.merch.name,
            'CategoryId': item.category_id,
            'CreatedOn': _cell(item.created_on),
            'ModifiedOn': _cell(item.modified_on),
            'Image': _cell(item.image),
        }

    def store_to_row(self, store: Store) -> Dict[str, str]:
        return {
            'Id': store.id,
            'InternalID': store.internal_id,
            'Merch': store.merch.name,
            'Name': _cell(store.name),
            'Address': _cell(store.address),
            'Longitude': _cell(store.longitude),
            'Latitude': _cell(store.latitude),
        }

    def _write(self, path: str, fieldnames: List[str], rows: List[Dict[str, str]]) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
        return len(rows)

    def export(self, snapshot: CatalogSnapshot, output_dir: str,
               prefix: Optional[str] = None) -> Dict[str, str]:
        """
        Write the three tables to output_dir.

        Args:
            snapshot: Catalog snapshot to export
            output_dir: Target directory (created if missing)
            prefix: Optional filename prefix (e.g., "iki_")

        Returns:
            Mapping of table name to written file path
        """
        os.makedirs(output_dir, exist_ok=True)
        prefix = prefix or ''

        paths = {
            'categories': os.path.join(output_dir, f'{prefix}categories.csv'),
            'items': os.path.join(output_dir, f'{prefix}items.csv'),
            'stores': os.path.join(output_dir, f'{prefix}stores.csv'),
        }

        n_categories = self._write(paths['categories'], CATEGORY_FIELDNAMES,
                                   [self.category_to_row(c) for c in snapshot.all_categories])
        n_items = self._write(paths['items'], ITEM_FIELDNAMES,
                              [self.item_to_row(i) for i in snapshot.items])
        n_stores = self._write(paths['stores'], STORE_FIELDNAMES,
                               [self.store_to_row(s) for s in snapshot.stores])

        logger.info("Exported %d categories, %d items, %d stores to %s",
                    n_categories, n_items, n_stores, output_dir)
        return paths
