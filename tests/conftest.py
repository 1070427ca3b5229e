"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import requests

from groceryscraper.errors import UnsupportedFetchModeError
from groceryscraper.models import Category, Item, Merchant, Store
from groceryscraper.sources.base import InitialData, MerchantCatalogSource
from groceryscraper.sources.iki import parse_categories, parse_items, parse_stores

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


class FakeSource(MerchantCatalogSource):
    """Source serving fixture JSON through the real IKI parsers, without network."""

    merchant = Merchant.IKI

    def __init__(self, initial_data: dict, listings: dict, fail_on: str = None):
        self.initial_data = initial_data
        self.listings = listings
        self.fail_on = fail_on
        self.calls = []
        self.closed = False

    @classmethod
    def from_config(cls, settings, session=None):
        return cls(settings["initial_data"], settings["listings"])

    def fetch_initial_data(self) -> InitialData:
        stores = parse_stores(self.initial_data)
        categories = parse_categories(self.initial_data["categories"], stores)
        return InitialData(stores=stores, categories=categories)

    def fetch_items(self, category=None, store_id=None):
        if store_id is not None:
            raise UnsupportedFetchModeError("Fetching items by store ID is not supported")
        self.calls.append(category.internal_id)
        if category.internal_id == self.fail_on:
            raise requests.ConnectionError(f"connection reset on {category.internal_id}")
        return parse_items(self.listings.get(category.internal_id, {"data": []}), category)

    def close(self):
        self.closed = True


@pytest.fixture
def initial_data():
    """Initial data with tree {A: [A1, A2], B: []}."""
    return load_fixture("initial_data.json")


@pytest.fixture
def listings():
    """Product listings keyed by category internal ID."""
    return {
        "A1": load_fixture("products_A1.json"),
        "A2": load_fixture("products_A2.json"),
        "B": {"data": []},
    }


@pytest.fixture
def fake_source(initial_data, listings):
    return FakeSource(initial_data, listings)


@pytest.fixture
def leaf_category():
    return Category(internal_id="A1", name_lt="Pienas", name_en="Milk", merch=Merchant.IKI)


@pytest.fixture
def sample_tree():
    """Tree {A: [A1, A2], B: []} built directly from models."""
    a1 = Category(internal_id="A1", name_lt="Pienas", merch=Merchant.IKI, parent_category_id="a")
    a2 = Category(internal_id="A2", name_lt="Sūris", merch=Merchant.IKI, parent_category_id="a")
    a = Category(id="a", internal_id="A", name_lt="Pieno produktai", merch=Merchant.IKI,
                 subcategories=(a1, a2))
    b = Category(internal_id="B", name_lt="Duona", merch=Merchant.IKI)
    return [a, b]


@pytest.fixture
def minimal_item():
    """Item with only required fields."""
    return Item(
        internal_id="123",
        name_lt="Pienas",
        price=199,
        category_id="cat-1",
        merch=Merchant.IKI,
    )


@pytest.fixture
def sample_store():
    return Store(internal_id="101", merch=Merchant.IKI, name="IKI Žirmūnai",
                 address="Žirmūnų g. 64", longitude=25.3011, latitude=54.7104)


@pytest.fixture
def make_source():
    """Factory for FakeSource instances with custom data or failure points."""
    return FakeSource
