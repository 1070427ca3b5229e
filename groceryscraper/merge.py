"""
Merge Policies

Set-like merging of entities into a list, keyed by an extraction function.
Both policies scan the collection in order and act on the first element
whose key matches.

    add_if_absent     - first occurrence wins; later duplicates are dropped
    update_or_append  - latest occurrence wins; the stored element is replaced
"""

from typing import Callable, Hashable, Iterable, List, TypeVar

T = TypeVar('T')
KeyFunc = Callable[[T], Hashable]


def _index_of(collection: List[T], key: Hashable, key_func: KeyFunc) -> int:
    for index, existing in enumerate(collection):
        if key_func(existing) == key:
            return index
    return -1


def add_if_absent(collection: List[T], entity: T, key_func: KeyFunc) -> bool:
    """
    Append entity unless an element with the same key is already present.

    Returns:
        True if appended, False if dropped as a duplicate
    """
    if _index_of(collection, key_func(entity), key_func) >= 0:
        return False
    collection.append(entity)
    return True


def update_or_append(collection: List[T], entity: T, key_func: KeyFunc) -> bool:
    """
    Replace the element with the same key, or append if there is none.

    Returns:
        True if appended, False if an existing element was replaced
    """
    index = _index_of(collection, key_func(entity), key_func)
    if index >= 0:
        collection[index] = entity
        return False
    collection.append(entity)
    return True


def merge_all(
    collection: List[T],
    entities: Iterable[T],
    key_func: KeyFunc,
    policy: Callable[[List[T], T, KeyFunc], bool] = add_if_absent,
) -> int:
    """Merge entities one by one with policy. Returns the number appended."""
    added = 0
    for entity in entities:
        if policy(collection, entity, key_func):
            added += 1
    return added


def by_internal_id(entity) -> str:
    """Key function for merchant-scoped entities."""
    return entity.internal_id
