"""Tests for groceryscraper/models/catalog.py"""

import dataclasses

import pytest

from groceryscraper.models import CatalogSnapshot, Category, Item, Merchant, Store


class TestCategory:
    def test_leaf_without_subcategories(self, leaf_category):
        assert leaf_category.is_leaf
        assert leaf_category.subcategories == ()

    def test_parent_is_not_leaf(self, sample_tree):
        assert not sample_tree[0].is_leaf

    def test_generates_distinct_ids(self):
        a = Category(internal_id="1", name_lt="a", merch=Merchant.IKI)
        b = Category(internal_id="1", name_lt="a", merch=Merchant.IKI)
        assert a.id != b.id

    def test_raises_on_empty_internal_id(self):
        with pytest.raises(ValueError, match="internal_id is required"):
            Category(internal_id="", name_lt="Pienas", merch=Merchant.IKI)

    @pytest.mark.parametrize("name", ["", None])
    def test_raises_on_empty_name(self, name):
        with pytest.raises(ValueError, match="name_lt is required"):
            Category(internal_id="1", name_lt=name, merch=Merchant.IKI)

    def test_is_frozen(self, leaf_category):
        with pytest.raises(dataclasses.FrozenInstanceError):
            leaf_category.name_lt = "Kita"


class TestStore:
    def test_only_internal_id_and_merch_required(self):
        store = Store(internal_id="103", merch=Merchant.IKI)
        assert store.name is None
        assert store.longitude is None

    def test_raises_on_empty_internal_id(self):
        with pytest.raises(ValueError):
            Store(internal_id="", merch=Merchant.IKI)


class TestItem:
    def test_default_values(self, minimal_item):
        assert minimal_item.discount_price is None
        assert minimal_item.loyalty_price is None
        assert minimal_item.price_per_unit_of_measure is None
        assert minimal_item.measure_unit is None
        assert minimal_item.image is None
        assert minimal_item.modified_on is None
        assert minimal_item.created_on is not None

    def test_raises_on_empty_name(self):
        with pytest.raises(ValueError, match="name_lt is required"):
            Item(internal_id="1", name_lt="", price=100, category_id="c", merch=Merchant.IKI)

    def test_raises_on_missing_category(self):
        with pytest.raises(ValueError, match="category_id is required"):
            Item(internal_id="1", name_lt="x", price=100, category_id="", merch=Merchant.IKI)

    def test_raises_on_float_price(self):
        with pytest.raises(ValueError, match="minor units"):
            Item(internal_id="1", name_lt="x", price=1.99, category_id="c", merch=Merchant.IKI)

    def test_raises_on_bool_price(self):
        with pytest.raises(ValueError):
            Item(internal_id="1", name_lt="x", price=True, category_id="c", merch=Merchant.IKI)


class TestCatalogSnapshot:
    def test_roots_and_items_for(self, sample_tree):
        a, b = sample_tree
        a1, a2 = a.subcategories
        item = Item(internal_id="X", name_lt="x", price=150, category_id=a2.id, merch=Merchant.IKI)
        snapshot = CatalogSnapshot(
            merch=Merchant.IKI,
            all_categories=(a, a1, a2, b),
            categories=(a1, a2, b),
            items=(item,),
        )
        assert snapshot.roots == (a, b)
        assert snapshot.items_for(a2) == [item]
        assert snapshot.items_for(a1) == []
        assert snapshot.items_by_internal_id() == {"X": item}
