"""Tests for groceryscraper/export/csv_exporter.py"""

import csv

import pytest

from groceryscraper.export import (
    CATEGORY_FIELDNAMES,
    ITEM_FIELDNAMES,
    STORE_FIELDNAMES,
    CatalogCSVExporter,
)
from groceryscraper.scraper import CatalogScraper


@pytest.fixture
def exporter():
    return CatalogCSVExporter()


@pytest.fixture
def snapshot(fake_source):
    return CatalogScraper(fake_source).scrape()


def _read(path):
    with open(path, encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestFieldnames:
    def test_item_columns_match_schema(self):
        assert len(ITEM_FIELDNAMES) == 18
        for column in ("InternalID", "Price", "PricePerUnitOfMeasure", "MeasureUnit",
                       "Ammount", "CategoryId", "Image"):
            assert column in ITEM_FIELDNAMES

    def test_category_columns_match_schema(self):
        assert CATEGORY_FIELDNAMES == [
            'Id', 'InternalID', 'NameEN', 'NameLT', 'Merch', 'CategoryId',
            'CreatedOn', 'ModifiedOn', 'Uri',
        ]


class TestRows:
    def test_item_row_has_all_columns(self, exporter, minimal_item):
        row = exporter.item_to_row(minimal_item)
        assert list(row) == ITEM_FIELDNAMES

    def test_unset_values_are_empty(self, exporter, minimal_item):
        row = exporter.item_to_row(minimal_item)
        assert row["Price"] == "199"
        assert row["DiscountPrice"] == ""
        assert row["MeasureUnit"] == ""
        assert row["ModifiedOn"] == ""

    def test_store_row(self, exporter, sample_store):
        row = exporter.store_to_row(sample_store)
        assert list(row) == STORE_FIELDNAMES
        assert row["Merch"] == "IKI"
        assert row["Longitude"] == "25.3011"

    def test_root_category_has_no_parent(self, exporter, sample_tree):
        assert exporter.category_to_row(sample_tree[0])["CategoryId"] == ""
        child = sample_tree[0].subcategories[0]
        assert exporter.category_to_row(child)["CategoryId"] == "a"


class TestExport:
    def test_writes_three_tables(self, exporter, snapshot, tmp_path):
        paths = exporter.export(snapshot, str(tmp_path / "out"), prefix="iki_")

        assert paths["items"].endswith("iki_items.csv")
        categories = _read(paths["categories"])
        items = _read(paths["items"])
        stores = _read(paths["stores"])

        assert [c["InternalID"] for c in categories] == ["A", "A1", "A2", "B"]
        assert [i["InternalID"] for i in items] == ["X", "Y", "Z"]
        assert len(stores) == 4

    def test_item_foreign_keys_point_to_leaves(self, exporter, snapshot, tmp_path):
        paths = exporter.export(snapshot, str(tmp_path))
        leaf_ids = {c.id for c in snapshot.categories}
        for row in _read(paths["items"]):
            assert row["CategoryId"] in leaf_ids
