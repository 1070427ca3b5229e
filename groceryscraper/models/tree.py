"""
Category tree traversal.

All functions take the top-level categories (the tree roots) and walk the
tree depth-first in document order. Each call returns a fresh generator,
so traversals are lazy and can be restarted.
"""

from typing import Iterable, Iterator, Optional

from .catalog import Category


def iter_leaves(categories: Iterable[Category]) -> Iterator[Category]:
    """
    Yield every category without subcategories.

    Only these categories are valid targets for item listing requests.
    """
    for category in categories:
        if category.subcategories:
            yield from iter_leaves(category.subcategories)
        else:
            yield category


def iter_all(categories: Iterable[Category]) -> Iterator[Category]:
    """Yield every category, parents before their children."""
    for category in categories:
        yield category
        yield from iter_all(category.subcategories)


def find_category(categories: Iterable[Category], internal_id: str) -> Optional[Category]:
    """Return the first category with the given internal ID, or None."""
    for category in iter_all(categories):
        if category.internal_id == internal_id:
            return category
    return None
