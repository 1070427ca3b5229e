"""
IKI Catalog Source

Fetches the store listing, category tree and per-category product
listings from the IKI e-shop JSON API.

Known limitation: only the first page (page_size rows) of each category
listing is requested.
"""

import logging
import uuid
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests

from ..common.constants import JSON_ACCEPT, USER_AGENT
from ..errors import CatalogParseError, UnsupportedFetchModeError
from ..merge import add_if_absent, by_internal_id
from ..models import Category, Item, Merchant, Store
from ..normalization import (
    fill_per_unit_prices,
    first_valid_url,
    parse_measure_unit,
    to_minor_units,
)
from .base import InitialData, MerchantCatalogSource

logger = logging.getLogger(__name__)

# Candidate image fields, most preferred first
IMAGE_FIELDS = ("photoUrl", "thumbUrl")

_MISSING = object()


def _require(row: Mapping[str, Any], path: Sequence[str], context: str) -> Any:
    """Walk a nested path, raising CatalogParseError if any step is missing."""
    value: Any = row
    for key in path:
        if not isinstance(value, Mapping):
            value = _MISSING
            break
        value = value.get(key, _MISSING)
        if value is None:
            value = _MISSING
        if value is _MISSING:
            break
    if value is _MISSING:
        raise CatalogParseError(f"{context}: missing required field '{'.'.join(path)}'")
    return value


def _optional(row: Mapping[str, Any], *path: str) -> Any:
    value: Any = row
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _optional_str(row: Mapping[str, Any], *path: str) -> Optional[str]:
    value = _optional(row, *path)
    return None if value is None else str(value)


def _optional_float(row: Mapping[str, Any], *path: str) -> Optional[float]:
    value = _optional(row, *path)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_stores(data: Mapping[str, Any], merch: Merchant = Merchant.IKI) -> List[Store]:
    """
    Parse the store listing of the last chain in the initial data.

    Args:
        data: Initial data JSON object

    Returns:
        Stores in listing order
    """
    chains = _require(data, ("chains",), "initial data")
    if not chains:
        return []

    stores = []
    for row in chains[-1].get("stores") or []:
        stores.append(Store(
            internal_id=str(_require(row, ("id",), "store")),
            merch=merch,
            name=_optional_str(row, "name"),
            address=_optional_str(row, "streetAndBuilding"),
            longitude=_optional_float(row, "location", "geopoint", "longitude"),
            latitude=_optional_float(row, "location", "geopoint", "latitude"),
        ))
    return stores


def parse_categories(
    nodes: Sequence[Mapping[str, Any]],
    stores: List[Store],
    merch: Merchant = Merchant.IKI,
    parent_id: Optional[str] = None,
) -> List[Category]:
    """
    Parse a list of category nodes and their subcategories recursively.

    Children are built before their parent so each child can carry the
    parent's id. Store IDs listed on a node are merged into ``stores``
    (mutated) with add-if-absent, so fully described stores already in the
    list are kept.

    Args:
        nodes: Category JSON nodes
        stores: Store list to merge referenced store IDs into
        parent_id: id of the parent Category, None for roots

    Returns:
        Parsed categories in node order
    """
    categories = []
    for node in nodes:
        internal_id = str(_require(node, ("id",), "category"))
        context = f"category {internal_id}"
        category_id = str(uuid.uuid4())

        subcategories = parse_categories(
            node.get("subcategories") or [], stores, merch, parent_id=category_id
        )

        # Not every store is present in the chain store listing
        for store_id in node.get("storeIds") or []:
            add_if_absent(stores, Store(internal_id=str(store_id), merch=merch), by_internal_id)

        name_lt = str(_require(node, ("name", "lt"), context))
        try:
            category = Category(
                id=category_id,
                internal_id=internal_id,
                name_lt=name_lt,
                name_en=_optional_str(node, "name", "en"),
                merch=merch,
                parent_category_id=parent_id,
                subcategories=tuple(subcategories),
            )
        except ValueError as e:
            raise CatalogParseError(f"{context}: {e}") from e
        categories.append(category)
    return categories


def parse_item(row: Mapping[str, Any], category: Category, merch: Merchant = Merchant.IKI) -> Item:
    """
    Parse one product listing row.

    Required: id, name.lt, prc.p. Missing optional fields (image, unit,
    description, discount prices) leave the corresponding field unset.
    """
    internal_id = str(_require(row, ("id",), "item"))
    context = f"item {internal_id}"

    try:
        price = to_minor_units(_require(row, ("prc", "p"), context))
    except ValueError as e:
        raise CatalogParseError(f"{context}: invalid price: {e}") from e

    name_lt = str(_require(row, ("name", "lt"), context))
    try:
        item = Item(
            internal_id=internal_id,
            name_lt=name_lt,
            name_en=_optional_str(row, "name", "en"),
            description=_optional_str(row, "description", "lt"),
            price=price,
            discount_price=_optional_price(row, "s", context),
            loyalty_price=_optional_price(row, "l", context),
            measure_unit=parse_measure_unit(_optional(row, "conversionMeasure")),
            ammount=_optional_float(row, "conversionValue"),
            image=first_valid_url(row, IMAGE_FIELDS),
            category_id=category.id,
            merch=merch,
        )
    except ValueError as e:
        raise CatalogParseError(f"{context}: {e}") from e
    return fill_per_unit_prices(item)


def _optional_price(row: Mapping[str, Any], key: str, context: str) -> Optional[int]:
    value = _optional(row, "prc", key)
    try:
        return to_minor_units(value)
    except ValueError:
        logger.debug("%s: ignoring invalid price prc.%s=%r", context, key, value)
        return None


def parse_items(
    data: Mapping[str, Any],
    category: Category,
    merch: Merchant = Merchant.IKI,
) -> List[Item]:
    """Parse all rows of a product listing response."""
    rows = _require(data, ("data",), f"listing for category {category.internal_id}")
    return [parse_item(row, category, merch) for row in rows]


class IkiCatalogSource(MerchantCatalogSource):
    """
    Catalog source for the IKI e-shop API.

    Usage:
        with IkiCatalogSource() as source:
            initial = source.fetch_initial_data()
            items = source.fetch_items(category=leaf)

    One session is shared by all threads of a concurrent fetch; only the
    request counter is mutated per call, under a lock.
    """

    merchant = Merchant.IKI

    def __init__(
        self,
        base_url: str = "https://eparduotuve.iki.lt",
        initial_data_path: str = "/api/initial_data",
        products_path: str = "/api/search/view_products",
        locale: str = "lt",
        page_size: int = 60,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.initial_data_url = self.base_url + initial_data_path
        self.products_url = self.base_url + products_path
        self.locale = locale
        self.page_size = page_size
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": JSON_ACCEPT,
        })
        self.requests_made = 0
        self._counter_lock = Lock()

    @classmethod
    def from_config(cls, settings: Mapping[str, Any], session: Optional[requests.Session] = None):
        """Build a source from a merchants.yaml entry."""
        keys = ("base_url", "initial_data_path", "products_path", "locale", "page_size", "timeout")
        return cls(session=session, **{k: settings[k] for k in keys if k in settings})

    def close(self):
        self.session.close()

    def _post(self, url: str, body: Dict[str, Any]) -> Dict[str, Any]:
        with self._counter_lock:
            self.requests_made += 1
        response = self.session.post(url, json=body, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_initial_data(self) -> InitialData:
        logger.info("Fetching initial data from %s", self.initial_data_url)
        data = self._post(self.initial_data_url, {"locale": self.locale})

        stores = parse_stores(data, self.merchant)
        listed = len(stores)
        categories = parse_categories(
            _require(data, ("categories",), "initial data"), stores, self.merchant
        )

        logger.info("Parsed %d root categories, %d stores (%d referenced only by ID)",
                    len(categories), len(stores), len(stores) - listed)
        return InitialData(stores=stores, categories=categories)

    def listing_body(self, category_internal_id: str) -> Dict[str, Any]:
        return {
            "limit": self.page_size,
            "params": {
                "type": "view_products",
                "categoryIds": [category_internal_id],
                "filter": {},
            },
        }

    def fetch_items(
        self,
        category: Optional[Category] = None,
        store_id: Optional[str] = None,
    ) -> List[Item]:
        if store_id is not None:
            raise UnsupportedFetchModeError("Fetching items by store ID is not supported")
        if category is None:
            raise ValueError("category is required")

        data = self._post(self.products_url, self.listing_body(category.internal_id))
        items = parse_items(data, category, self.merchant)

        if len(items) >= self.page_size:
            logger.warning("Category %s returned a full page (%d items); listing may be truncated",
                           category.internal_id, len(items))
        logger.debug("Category %s: %d items", category.internal_id, len(items))
        return items
