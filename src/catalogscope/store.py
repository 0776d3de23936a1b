"""Catalog store boundary and an in-memory implementation.

Stores receive the structured Predicate; a database-backed store translates
``predicate.to_filter()`` into its own query, the in-memory store evaluates
``predicate.matches()`` directly. Store failures are raised as StoreError
subclasses and are never retried by the engine.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Protocol, runtime_checkable

from .exceptions import StoreError
from .models import Item, SortSpec
from .predicates import Predicate


@runtime_checkable
class CatalogStore(Protocol):
    """Read interface the engine needs from a catalog store."""

    def find(
        self,
        predicate: Predicate,
        limit: Optional[int] = None,
        sort: Optional[SortSpec] = None,
    ) -> Iterable[Item]:
        """Items matching ``predicate`` in natural or ``sort`` order, at most ``limit``."""
        ...

    def get(self, item_id: str) -> Optional[Item]:
        """The item with this id, or None."""
        ...


class InMemoryCatalogStore:
    """Dict-backed store. Natural order is insertion order.

    Example::

        store = InMemoryCatalogStore([item_a, item_b])
        list(store.find(Predicate.always(), limit=1))  # [item_a]
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[str, Item] = {}
        self.extend(items)

    def add(self, item: Item) -> Item:
        if item.id in self._items:
            raise StoreError(f"Duplicate item id: {item.id}", item_id=item.id)
        self._items[item.id] = item
        return item

    def extend(self, items: Iterable[Item]) -> None:
        for item in items:
            self.add(item)

    def remove(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    def clear(self) -> None:
        self._items.clear()

    def find(
        self,
        predicate: Predicate,
        limit: Optional[int] = None,
        sort: Optional[SortSpec] = None,
    ) -> Iterator[Item]:
        matched: Iterable[Item] = (item for item in list(self._items.values()) if predicate.matches(item))
        if sort is not None and sort.keys:
            matched = sort.apply(matched)
        for count, item in enumerate(matched):
            if limit is not None and count >= limit:
                return
            yield item

    def get(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items


__all__ = [
    "CatalogStore",
    "InMemoryCatalogStore",
]
