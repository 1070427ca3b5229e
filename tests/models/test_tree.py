"""Tests for groceryscraper/models/tree.py"""

import itertools
import random

import pytest

from groceryscraper.models import Category, Merchant, find_category, iter_all, iter_leaves

_counter = itertools.count()


def _random_tree(rng: random.Random, depth: int = 0, parent_id=None):
    """Build a random forest, returning (roots, expected leaf internal IDs)."""
    roots, leaves = [], []
    for _ in range(rng.randint(0 if depth else 1, 4)):
        node_id = f"n{next(_counter)}"
        children, child_leaves = [], []
        if depth < 4 and rng.random() < 0.5:
            children, child_leaves = _random_tree(rng, depth + 1, parent_id=node_id)
        node = Category(id=node_id, internal_id=node_id, name_lt=node_id, merch=Merchant.IKI,
                        parent_category_id=parent_id, subcategories=tuple(children))
        roots.append(node)
        leaves.extend(child_leaves if children else [node_id])
    return roots, leaves


class TestIterLeaves:
    def test_sample_tree_leaves(self, sample_tree):
        assert [c.internal_id for c in iter_leaves(sample_tree)] == ["A1", "A2", "B"]

    def test_empty_forest(self):
        assert list(iter_leaves([])) == []

    def test_is_restartable(self, sample_tree):
        first = [c.internal_id for c in iter_leaves(sample_tree)]
        second = [c.internal_id for c in iter_leaves(sample_tree)]
        assert first == second

    def test_is_lazy(self, sample_tree):
        leaves = iter_leaves(sample_tree)
        assert next(leaves).internal_id == "A1"

    @pytest.mark.parametrize("seed", range(25))
    def test_returns_exactly_nodes_without_children(self, seed):
        roots, expected = _random_tree(random.Random(seed))
        leaves = list(iter_leaves(roots))
        assert [c.internal_id for c in leaves] == expected
        assert all(not c.subcategories for c in leaves)
        childless = {c.internal_id for c in iter_all(roots) if not c.subcategories}
        assert {c.internal_id for c in leaves} == childless


class TestIterAll:
    def test_parents_before_children(self, sample_tree):
        assert [c.internal_id for c in iter_all(sample_tree)] == ["A", "A1", "A2", "B"]

    def test_children_reference_parent_id(self, sample_tree):
        a = sample_tree[0]
        for child in a.subcategories:
            assert child.parent_category_id == a.id


class TestFindCategory:
    def test_finds_nested(self, sample_tree):
        assert find_category(sample_tree, "A2").name_lt == "Sūris"

    def test_finds_root(self, sample_tree):
        assert find_category(sample_tree, "B").internal_id == "B"

    def test_missing_returns_none(self, sample_tree):
        assert find_category(sample_tree, "Q") is None
