"""
Catalog export modules.

Modules:
    json_exporter - shopItems JSON feed consumed by the app
    csv_exporter  - Category / item / store tables in persistence column layout
"""

from .csv_exporter import (
    CATEGORY_FIELDNAMES,
    ITEM_FIELDNAMES,
    STORE_FIELDNAMES,
    CatalogCSVExporter,
)
from .json_exporter import export_json, snapshot_to_dict

__all__ = [
    'CatalogCSVExporter',
    'CATEGORY_FIELDNAMES',
    'ITEM_FIELDNAMES',
    'STORE_FIELDNAMES',
    'export_json',
    'snapshot_to_dict',
]
