"""Tests for the in-memory store and the query executor."""

from __future__ import annotations

import pytest
from conftest import ids

from catalogscope import (
    CatalogService,
    CatalogStore,
    Clause,
    InMemoryCatalogStore,
    Item,
    Operator,
    Predicate,
    QueryExecutor,
    SortSpec,
    StaticFactsProvider,
    StoreError,
    StoreUnavailableError,
)


class UnavailableStore:
    """Store whose every call fails."""

    def __init__(self) -> None:
        self.error = StoreUnavailableError("replica down", host="db-1")

    def find(self, predicate, limit=None, sort=None):
        raise self.error

    def get(self, item_id):
        raise self.error


class LimitIgnoringStore(InMemoryCatalogStore):
    def find(self, predicate, limit=None, sort=None):
        return super().find(predicate, limit=None, sort=sort)


class TestInMemoryCatalogStore:
    def test_satisfies_protocol(self, store) -> None:
        assert isinstance(store, CatalogStore)

    def test_natural_order(self, store) -> None:
        assert ids(store.find(Predicate.always())) == ["p1", "p2", "p3", "p4", "p5"]

    def test_find_with_limit_and_sort(self, store) -> None:
        found = store.find(Predicate.always(), limit=2, sort=SortSpec.from_mapping({"title": 1}))
        assert ids(found) == ["p3", "p5"]

    def test_find_with_predicate(self, store) -> None:
        predicate = Predicate.of(Clause("is_public", Operator.EQ, False))
        assert ids(store.find(predicate)) == ["p1"]

    def test_get(self, store) -> None:
        assert store.get("p4").title == "Teddy Ruxpin"
        assert store.get("missing") is None

    def test_duplicate_id(self, store) -> None:
        with pytest.raises(StoreError, match="Duplicate item id"):
            store.add(Item(id="p1", tenant_id="x"))

    def test_remove_and_clear(self, store) -> None:
        store.remove("p1")
        store.remove("p1")
        assert "p1" not in store
        assert len(store) == 4
        store.clear()
        assert len(store) == 0


class TestQueryExecutor:
    def test_single_pass(self, store) -> None:
        results = QueryExecutor(store).execute(Predicate.always())
        assert len(list(results)) == 5
        assert list(results) == []

    def test_limit_enforced_when_store_ignores_it(self, products) -> None:
        executor = QueryExecutor(LimitIgnoringStore(products))
        assert ids(executor.execute(Predicate.always(), limit=3)) == ["p1", "p2", "p3"]

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit(self, store, limit) -> None:
        assert list(QueryExecutor(store).execute(Predicate.always(), limit=limit)) == []

    def test_store_error_propagates_unchanged(self) -> None:
        store = UnavailableStore()
        with pytest.raises(StoreUnavailableError) as exc_info:
            list(QueryExecutor(store).execute(Predicate.always()))
        assert exc_info.value is store.error


class TestServiceStoreFailures:
    def test_list_items(self, visitor) -> None:
        store = UnavailableStore()
        service = CatalogService(store, StaticFactsProvider(visitor))
        with pytest.raises(StoreUnavailableError) as exc_info:
            service.list_items(24)
        assert exc_info.value is store.error
        assert exc_info.value.details == {"host": "db-1"}

    def test_get_item(self, visitor) -> None:
        service = CatalogService(UnavailableStore(), StaticFactsProvider(visitor))
        with pytest.raises(StoreError):
            service.get_item("p1")
