"""Tests for catalog models and their record serialization."""

from __future__ import annotations

import pytest

from catalogscope import FilterParams, InvalidSortSpec, Item, ItemKind, PriceRange, SortKey, SortSpec, Tenant, TenantKind


class TestItem:
    def test_from_storefront_record(self) -> None:
        record = {
            "_id": "p1",
            "shopId": "shop-1",
            "title": "My Little Pony",
            "type": "simple",
            "ancestors": [],
            "price": {"range": "1.00 - 12.99", "min": 1.00, "max": 12.99},
            "isVisible": False,
            "handle": "my-little-pony",
            "isSoldOut": False,
        }
        item = Item.from_record(record)
        assert item.id == "p1"
        assert item.tenant_id == "shop-1"
        assert item.kind == ItemKind.SIMPLE
        assert item.price_range == PriceRange(min=1.0, max=12.99, display_range="1.00 - 12.99")
        assert item.is_public is False
        assert item.slug == "my-little-pony"
        assert item.is_top_level

    def test_absent_price_round_trips_as_absent(self) -> None:
        item = Item(id="gift", tenant_id="t1", title="Gift Card")
        record = item.to_record()
        assert "price_range" not in record
        assert "slug" not in record
        assert Item.from_record(record).price_range is None
        assert Item.from_record(record) == item

    def test_priced_item_round_trip(self) -> None:
        item = Item(id="p", tenant_id="t1", price_range={"min": 0, "max": 0}, slug="p")
        record = item.to_record()
        assert record["price_range"] == {"min": 0.0, "max": 0.0, "display_range": "0.00"}
        assert Item.from_record(record) == item

    def test_composite_requires_ancestry(self) -> None:
        with pytest.raises(ValueError, match="at least one ancestor"):
            Item(id="v1", tenant_id="t1", kind="composite")

    def test_composite_item(self) -> None:
        item = Item(id="v1", tenant_id="t1", kind="composite", ancestry=["p1"])
        assert item.ancestry == ("p1",)
        assert not item.is_top_level

    def test_items_are_frozen(self) -> None:
        item = Item(id="p", tenant_id="t1")
        with pytest.raises(ValueError):
            item.title = "changed"


class TestPriceRange:
    def test_display_range_default(self) -> None:
        assert PriceRange(min=12.99, max=19.99).display_range == "12.99 - 19.99"
        assert PriceRange(min=5, max=5).display_range == "5.00"

    def test_min_above_max(self) -> None:
        with pytest.raises(ValueError, match="exceeds max"):
            PriceRange(min=20, max=10)


class TestTenant:
    def test_storefront_shape(self) -> None:
        tenant = Tenant.model_validate({"_id": "s", "shopType": "primary", "active": True})
        assert tenant.is_primary
        assert tenant.kind == TenantKind.PRIMARY

    def test_defaults(self) -> None:
        tenant = Tenant(id="s")
        assert tenant.kind == TenantKind.MERCHANT
        assert tenant.is_active


class TestFilterParams:
    def test_wire_keys(self) -> None:
        params = FilterParams.from_mapping({"query": "pony", "price.min": "2.00", "price.max": 24, "shops": ["a"]})
        assert params.query_text == "pony"
        assert params.price_min == "2.00"
        assert params.price_max == 24
        assert params.explicit_tenant_ids == ("a",)

    def test_empty(self) -> None:
        params = FilterParams.from_mapping(None)
        assert params == FilterParams()
        assert params.explicit_tenant_ids == ()

    def test_single_shop_string(self) -> None:
        assert FilterParams.from_mapping({"shops": "a"}).explicit_tenant_ids == ("a",)

    def test_passthrough(self) -> None:
        params = FilterParams(query_text="x")
        assert FilterParams.from_mapping(params) is params


class TestSortSpec:
    def test_from_mapping(self) -> None:
        spec = SortSpec.from_mapping({"title": 1, "price_range.min": -1, "slug": "desc"})
        assert [(k.field, k.descending) for k in spec.keys] == [
            ("title", False),
            ("price_range.min", True),
            ("slug", True),
        ]

    def test_apply_is_stable(self) -> None:
        items = [Item(id=str(i), tenant_id="t", title="same") for i in range(5)]
        assert SortSpec.from_mapping({"title": -1}).apply(items) == items

    def test_storefront_aliases(self) -> None:
        spec = SortSpec.from_mapping({"price.min": -1, "shopId": 1, "handle": "asc", "isVisible": -1})
        assert [k.field for k in spec.keys] == ["price_range.min", "tenant_id", "slug", "is_public"]

    def test_alias_orders_items(self) -> None:
        items = [
            Item(id="a", tenant_id="t", price_range={"min": 1, "max": 2}),
            Item(id="b", tenant_id="t", price_range={"min": 5, "max": 6}),
            Item(id="c", tenant_id="t"),
        ]
        ordered = SortSpec.from_mapping({"price.min": -1}).apply(items)
        assert [item.id for item in ordered] == ["b", "a", "c"]

    @pytest.mark.parametrize("name", ["price_range", "price", "ancestry", "colour", "price_range.currency"])
    def test_unorderable_field(self, name) -> None:
        with pytest.raises(InvalidSortSpec, match="Cannot sort on") as exc_info:
            SortSpec.from_mapping({name: 1})
        assert exc_info.value.code == "INVALID_SORT_SPEC"
        assert exc_info.value.details["field"] == name

    @pytest.mark.parametrize("direction", [0, None, True, "sideways"])
    def test_invalid_direction(self, direction) -> None:
        with pytest.raises(InvalidSortSpec, match="Invalid sort direction"):
            SortSpec.from_mapping({"title": direction})

    def test_sort_key_validates_field(self) -> None:
        assert SortKey(field="handle").field == "slug"
        with pytest.raises(ValueError, match="Cannot sort on"):
            SortKey(field="price_range")
