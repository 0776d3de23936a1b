"""Shared fixtures: three shops and five products.

Shop layout:
- ``shop``: merchant shop with three products (one hidden)
- ``merchant``: a second merchant shop with one product
- ``primary``: the platform's primary shop with one product
"""

from __future__ import annotations

import pytest

from catalogscope import (
    CatalogService,
    InMemoryCatalogStore,
    Item,
    PermissionFacts,
    StaticFactsProvider,
    Tenant,
    TenantKind,
)

SHOP_ID = "shop-1"
MERCHANT_ID = "shop-2"
PRIMARY_ID = "shop-primary"

PRICE_RANGE_A = {"range": "1.00 - 12.99", "min": 1.00, "max": 12.99}
PRICE_RANGE_B = {"range": "12.99 - 19.99", "min": 12.99, "max": 19.99}


def product(_id: str, title: str, shop_id: str, *, visible: bool, price: dict | None = PRICE_RANGE_A, handle=None):
    record = {
        "_id": _id,
        "ancestors": [],
        "title": title,
        "shopId": shop_id,
        "type": "simple",
        "isVisible": visible,
        "isLowQuantity": False,
        "isSoldOut": False,
        "isBackorder": False,
    }
    if price is not None:
        record["price"] = price
    if handle is not None:
        record["handle"] = handle
    return Item.from_record(record)


@pytest.fixture
def tenants() -> list[Tenant]:
    return [
        Tenant(id=SHOP_ID, kind=TenantKind.MERCHANT),
        Tenant(id=MERCHANT_ID, kind=TenantKind.MERCHANT),
        Tenant(id=PRIMARY_ID, kind=TenantKind.PRIMARY),
    ]


@pytest.fixture
def products() -> list[Item]:
    return [
        product("p1", "My Little Pony", SHOP_ID, visible=False, handle="my-little-pony"),
        product("p2", "Shopkins - Peachy", SHOP_ID, visible=True, price=PRICE_RANGE_B, handle="shopkins-peachy"),
        product("p3", "Fresh Tomatoes", SHOP_ID, visible=True, handle="fresh-tomatoes"),
        product("p4", "Teddy Ruxpin", MERCHANT_ID, visible=True, handle="teddy-ruxpin"),
        product("p5", "Garbage Pail Kids", PRIMARY_ID, visible=True, handle="garbage-pail-kids"),
    ]


@pytest.fixture
def store(products: list[Item]) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(products)


@pytest.fixture
def make_facts(tenants: list[Tenant]):
    """Build PermissionFacts for a caller in ``current`` with the given grants."""

    def _make(current: str, managed=(), elevated=()) -> PermissionFacts:
        return PermissionFacts.build(current, tenants, managed_tenant_ids=managed, elevated_tenant_ids=elevated)

    return _make


@pytest.fixture
def platform_admin(make_facts) -> PermissionFacts:
    return make_facts(PRIMARY_ID, managed=[SHOP_ID, MERCHANT_ID, PRIMARY_ID], elevated=[SHOP_ID, MERCHANT_ID, PRIMARY_ID])


@pytest.fixture
def tenant_admin(make_facts) -> PermissionFacts:
    return make_facts(SHOP_ID, managed=[SHOP_ID, MERCHANT_ID, PRIMARY_ID], elevated=[SHOP_ID])


@pytest.fixture
def visitor(make_facts) -> PermissionFacts:
    return make_facts(SHOP_ID)


@pytest.fixture
def service_for(store: InMemoryCatalogStore):
    """CatalogService whose provider always returns ``facts``."""

    def _make(facts: PermissionFacts, **kwargs) -> CatalogService:
        return CatalogService(store, StaticFactsProvider(facts), **kwargs)

    return _make


def ids(items) -> list[str]:
    return [item.id for item in items]
