"""Runs a merged predicate against the catalog store."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .models import Item, SortSpec
from .predicates import Predicate
from .store import CatalogStore

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Single-pass query execution.

    ``execute()`` returns a generator: iterate it once. Ordering is the
    store's natural order unless a SortSpec is given. StoreError raised by
    the store propagates unchanged.
    """

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def execute(
        self,
        predicate: Predicate,
        limit: Optional[int] = None,
        sort: Optional[SortSpec] = None,
    ) -> Iterator[Item]:
        if limit is not None and limit <= 0:
            return
        logger.debug("Executing %r (limit=%s, sort=%s)", predicate, limit, sort)
        count = 0
        for item in self.store.find(predicate, limit=limit, sort=sort):
            # Stores may ignore the limit hint.
            if limit is not None and count >= limit:
                return
            count += 1
            yield item


__all__ = ["QueryExecutor"]
