"""
Catalog Scraper

Merchant-agnostic orchestrator. Owns the collected categories, stores and
items of one merchant and delegates all network and parsing work to a
MerchantCatalogSource.

Lifecycle:
    UNINITIALIZED --init()--> INITIALIZED --refetch_all_items() / update_items_by()--> POPULATED

A scraper instance is not safe for concurrent scrape() calls; callers must
serialize them.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidFetchArgumentsError, ScraperStateError, UnknownCategoryError
from .merge import add_if_absent, by_internal_id, merge_all, update_or_append
from .models import CatalogSnapshot, Category, Item, Store, find_category, iter_all, iter_leaves
from .sources.base import MerchantCatalogSource

logger = logging.getLogger(__name__)


class ScraperState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    POPULATED = "populated"


@dataclass
class ScrapeStats:
    """Counters of the last full item fetch."""
    leaves_fetched: int = 0
    rows_received: int = 0
    items_kept: int = 0
    duplicates_dropped: int = 0
    # Duplicates where the kept (first) copy has price 0 and a dropped copy does not
    zero_price_kept: int = 0


class CatalogScraper:
    """
    Scrapes one merchant's catalog through its source.

    Usage:
        with CatalogScraper(IkiCatalogSource()) as scraper:
            snapshot = scraper.scrape()

    Item duplicates across leaf categories are resolved first-wins during
    a full fetch: the copy from the earliest leaf (depth-first order) is
    kept even if a later copy has a non-zero price where the kept one has
    price 0. Such cases are counted in ``stats.zero_price_kept`` and logged.
    """

    def __init__(self, source: MerchantCatalogSource, max_workers: int = 1):
        """
        Initialize the scraper.

        Args:
            source: Merchant catalog source
            max_workers: Maximum concurrent leaf category requests
                (1 = strictly sequential)
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.source = source
        self.max_workers = max_workers
        self.stats = ScrapeStats()

        self._roots: List[Category] = []
        self._all_categories: List[Category] = []
        self._categories: List[Category] = []
        self._stores: List[Store] = []
        self._items: List[Item] = []
        self._state = ScraperState.UNINITIALIZED

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.source.close()

    @property
    def merchant(self):
        return self.source.merchant

    @property
    def state(self) -> ScraperState:
        return self._state

    @property
    def all_categories(self) -> Tuple[Category, ...]:
        """All categories, including those with subcategories."""
        return tuple(self._all_categories)

    @property
    def categories(self) -> Tuple[Category, ...]:
        """Leaf categories only."""
        return tuple(self._categories)

    @property
    def stores(self) -> Tuple[Store, ...]:
        return tuple(self._stores)

    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(self._items)

    def _reset(self) -> None:
        self._items = []

    def _hard_reset(self) -> None:
        self._reset()
        self._roots = []
        self._all_categories = []
        self._categories = []
        self._stores = []
        self._state = ScraperState.UNINITIALIZED

    def _require_initialized(self) -> None:
        if self._state is ScraperState.UNINITIALIZED:
            raise ScraperStateError("init() must complete before items can be fetched")

    def scrape(self) -> CatalogSnapshot:
        """
        Rebuild categories, stores and items from scratch.

        Returns:
            Snapshot of the freshly scraped catalog
        """
        self.init()
        self.refetch_all_items()
        return self.snapshot()

    def init(self) -> None:
        """Fetch the category tree and stores. Discards all collected data."""
        self._hard_reset()

        initial = self.source.fetch_initial_data()

        self._roots = list(initial.categories)
        self._all_categories = list(iter_all(self._roots))
        self._categories = list(iter_leaves(self._roots))
        merge_all(self._stores, initial.stores, by_internal_id, add_if_absent)
        self._state = ScraperState.INITIALIZED

        logger.info("Initialized %s: %d categories (%d leaves), %d stores",
                    self.merchant.name, len(self._all_categories),
                    len(self._categories), len(self._stores))

    def refetch_all_items(self) -> None:
        """
        Rebuild the item list from every leaf category.

        Items are merged add-if-absent in leaf order, whatever order the
        responses arrive in.
        """
        self._require_initialized()
        self._reset()
        self._state = ScraperState.INITIALIZED
        self.stats = ScrapeStats()

        leaves = list(self._categories)
        total = len(leaves)
        for i, (leaf, items) in enumerate(self._fetch_leaves(leaves), 1):
            logger.info("[%d/%d] %s: %d items", i, total, leaf.name_lt, len(items))
            self._merge_first_wins(items)
            self.stats.leaves_fetched += 1

        self._state = ScraperState.POPULATED
        logger.info("Fetched %d items from %d categories (%d duplicates dropped)",
                    len(self._items), self.stats.leaves_fetched, self.stats.duplicates_dropped)
        if self.stats.zero_price_kept:
            logger.warning("%d items kept with price 0 while a duplicate had a price",
                           self.stats.zero_price_kept)

    def update_items_by(
        self,
        category_id: Optional[str] = None,
        store_id: Optional[str] = None,
    ) -> int:
        """
        Fetch items for one category or store and merge them update-or-append.

        Existing items with the same internal ID are replaced; new ones are
        appended. Previously collected items are kept.

        Args:
            category_id: Internal ID of a leaf category
            store_id: Internal ID of a store

        Returns:
            Number of items appended

        Raises:
            InvalidFetchArgumentsError: If not exactly one argument is given,
                or the category has subcategories
            ScraperStateError: If init() has not completed
            UnknownCategoryError: If the category is not in the tree
            UnsupportedFetchModeError: If the source cannot fetch by store
        """
        if category_id is None and store_id is None:
            raise InvalidFetchArgumentsError("Either category_id or store_id must be given")
        if category_id is not None and store_id is not None:
            raise InvalidFetchArgumentsError("Only one of category_id and store_id may be given")
        self._require_initialized()

        if store_id is not None:
            items = self.source.fetch_items(store_id=store_id)
        else:
            category = find_category(self._roots, category_id)
            if category is None:
                raise UnknownCategoryError(f"Unknown category: {category_id}")
            if not category.is_leaf:
                raise InvalidFetchArgumentsError(
                    f"Category {category_id} has subcategories; only leaf categories list items"
                )
            items = self.source.fetch_items(category=category)

        appended = merge_all(self._items, items, by_internal_id, update_or_append)
        self._state = ScraperState.POPULATED
        logger.info("Updated %d items (%d new)", len(items), appended)
        return appended

    def snapshot(self) -> CatalogSnapshot:
        """Immutable view of the current collections."""
        return CatalogSnapshot(
            merch=self.merchant,
            all_categories=self.all_categories,
            categories=self.categories,
            stores=self.stores,
            items=self.items,
        )

    def _fetch_leaves(self, leaves: Sequence[Category]) -> Iterator[Tuple[Category, List[Item]]]:
        """Yield (leaf, items) in leaf order, fetching up to max_workers at once."""
        if self.max_workers == 1:
            for leaf in leaves:
                yield leaf, self.source.fetch_items(category=leaf)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.source.fetch_items, category=leaf) for leaf in leaves]
            try:
                for leaf, future in zip(leaves, futures):
                    yield leaf, future.result()
            finally:
                for future in futures:
                    future.cancel()

    def _merge_first_wins(self, items: List[Item]) -> None:
        for item in items:
            self.stats.rows_received += 1
            if add_if_absent(self._items, item, by_internal_id):
                self.stats.items_kept += 1
                continue

            self.stats.duplicates_dropped += 1
            kept = next(i for i in self._items if i.internal_id == item.internal_id)
            if kept.price == 0 and item.price != 0:
                self.stats.zero_price_kept += 1
                logger.debug("Item %s: kept price 0, dropped duplicate with price %d",
                             item.internal_id, item.price)
