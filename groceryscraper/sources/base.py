"""
Merchant catalog source interface.

A source performs the network requests for one merchant and parses the
responses into catalog models. It holds no catalog state; the
CatalogScraper owns the collected entities.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..models import Category, Item, Merchant, Store


@dataclass(frozen=True)
class InitialData:
    """Parsed initial data: every known store and the category tree roots."""
    stores: List[Store]
    categories: List[Category]


class MerchantCatalogSource(ABC):
    """One implementation per merchant API."""

    merchant: Merchant

    @classmethod
    @abstractmethod
    def from_config(cls, settings: Mapping[str, Any], session=None) -> "MerchantCatalogSource":
        """Build a source from a merchants.yaml entry."""

    @abstractmethod
    def fetch_initial_data(self) -> InitialData:
        """Fetch and parse the store listing and full category tree."""

    @abstractmethod
    def fetch_items(
        self,
        category: Optional[Category] = None,
        store_id: Optional[str] = None,
    ) -> List[Item]:
        """
        Fetch and parse the items of one leaf category or one store.

        Raises:
            UnsupportedFetchModeError: If the merchant cannot list by this criterion
        """

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
