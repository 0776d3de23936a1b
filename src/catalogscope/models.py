"""Catalog data models.

Pydantic models for catalog items, tenants, search filters and sort specs.
Items accept both the snake_case field names and the camelCase record shape
used by the storefront (``_id``, ``shopId``, ``isVisible``, ``handle``...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import InvalidSortSpec


def field_value(obj: Any, path: str) -> Any:
    """Resolve a dotted field path (``"price_range.min"``) on a model.

    Returns None when any segment is missing.
    """
    value = obj
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


class ItemKind(str, Enum):
    SIMPLE = "simple"
    COMPOSITE = "composite"


class TenantKind(str, Enum):
    PRIMARY = "primary"
    MERCHANT = "merchant"


class PriceRange(BaseModel):
    """Price span across an item's purchasable variants."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    display_range: str = Field(validation_alias=AliasChoices("display_range", "displayRange", "range"))

    @model_validator(mode="before")
    @classmethod
    def default_display_range(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        if any(key in data for key in ("display_range", "displayRange", "range")):
            return data
        if "min" not in data or "max" not in data:
            return data
        data = dict(data)
        lo, hi = float(data["min"]), float(data["max"])
        data["display_range"] = f"{lo:.2f}" if lo == hi else f"{lo:.2f} - {hi:.2f}"
        return data

    @model_validator(mode="after")
    def check_bounds(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError(f"price range min {self.min} exceeds max {self.max}")
        return self


class Item(BaseModel):
    """A catalog entry. Read-only to the engine."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    tenant_id: str = Field(validation_alias=AliasChoices("tenant_id", "tenantId", "shopId"))
    title: str = ""
    kind: ItemKind = Field(default=ItemKind.SIMPLE, validation_alias=AliasChoices("kind", "type"))
    ancestry: tuple[str, ...] = Field(default=(), validation_alias=AliasChoices("ancestry", "ancestors"))
    price_range: Optional[PriceRange] = Field(
        default=None,
        validation_alias=AliasChoices("price_range", "priceRange", "price"),
    )
    is_public: bool = Field(default=False, validation_alias=AliasChoices("is_public", "isPublic", "isVisible"))
    slug: Optional[str] = Field(default=None, validation_alias=AliasChoices("slug", "handle"))

    @model_validator(mode="after")
    def check_ancestry(self) -> "Item":
        if self.kind == ItemKind.COMPOSITE and not self.ancestry:
            raise ValueError(f"composite item {self.id!r} must have at least one ancestor")
        return self

    @property
    def is_top_level(self) -> bool:
        return not self.ancestry

    def to_record(self) -> dict[str, Any]:
        """Dump to a plain dict. Absent optional fields are omitted, not zeroed."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Item":
        return cls.model_validate(dict(record))


class Tenant(BaseModel):
    """A storefront owning a subset of the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    kind: TenantKind = Field(default=TenantKind.MERCHANT, validation_alias=AliasChoices("kind", "shopType"))
    is_active: bool = Field(default=True, validation_alias=AliasChoices("is_active", "isActive", "active"))

    @property
    def is_primary(self) -> bool:
        return self.kind == TenantKind.PRIMARY


class FilterParams(BaseModel):
    """Caller-supplied search filters for one request.

    Price bounds are kept raw: strings such as ``"12.99"`` are parsed by the
    filter compiler, which drops bounds it cannot interpret.
    """

    model_config = ConfigDict(frozen=True)

    query_text: Optional[str] = Field(default=None, validation_alias=AliasChoices("query_text", "query"))
    price_min: Any = Field(default=None, validation_alias=AliasChoices("price_min", "price.min"))
    price_max: Any = Field(default=None, validation_alias=AliasChoices("price_max", "price.max"))
    explicit_tenant_ids: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("explicit_tenant_ids", "shops"),
    )

    @field_validator("explicit_tenant_ids", mode="before")
    @classmethod
    def coerce_tenant_ids(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @classmethod
    def from_mapping(cls, raw: "FilterParams | Mapping[str, Any] | None") -> "FilterParams":
        """Build from a raw filter document (``{"query": ..., "price.min": ...}``)."""
        if raw is None:
            return cls()
        if isinstance(raw, FilterParams):
            return raw
        return cls.model_validate(dict(raw))


# Storefront sort document keys mapped to Item field paths.
SORT_FIELD_ALIASES: dict[str, str] = {
    "_id": "id",
    "shopId": "tenant_id",
    "tenantId": "tenant_id",
    "type": "kind",
    "handle": "slug",
    "isVisible": "is_public",
    "isPublic": "is_public",
    "price.min": "price_range.min",
    "price.max": "price_range.max",
    "price.range": "price_range.display_range",
    "priceRange.min": "price_range.min",
    "priceRange.max": "price_range.max",
}

# Paths whose values are scalars and can be ordered.
SORTABLE_FIELDS = frozenset(
    {
        "id",
        "tenant_id",
        "title",
        "kind",
        "slug",
        "is_public",
        "price_range.min",
        "price_range.max",
        "price_range.display_range",
    }
)


def sort_field_path(name: str) -> str:
    """Resolve a sort key (field path or storefront alias) to an Item field path.

    Raises:
        InvalidSortSpec: If the key names no orderable field.
    """
    path = SORT_FIELD_ALIASES.get(name, name)
    if path not in SORTABLE_FIELDS:
        raise InvalidSortSpec(f"Cannot sort on {name!r}", field=name, sortable=sorted(SORTABLE_FIELDS))
    return path


class SortKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    descending: bool = False

    @field_validator("field", mode="before")
    @classmethod
    def resolve_field(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        try:
            return sort_field_path(v)
        except InvalidSortSpec as e:
            raise ValueError(e.message)


class SortSpec(BaseModel):
    """Ordered sort keys. Items missing a key's value sort after the rest."""

    model_config = ConfigDict(frozen=True)

    keys: tuple[SortKey, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SortSpec":
        """Build from a ``{field: 1 | -1 | "asc" | "desc"}`` document."""
        keys = []
        for name, direction in raw.items():
            path = sort_field_path(name)
            if isinstance(direction, str) and direction.lower() in ("asc", "ascending", "1"):
                descending = False
            elif isinstance(direction, str) and direction.lower() in ("desc", "descending", "-1"):
                descending = True
            elif isinstance(direction, (int, float)) and not isinstance(direction, bool) and direction != 0:
                descending = direction < 0
            else:
                raise InvalidSortSpec(f"Invalid sort direction for {name!r}: {direction!r}", field=name)
            keys.append(SortKey(field=path, descending=descending))
        return cls(keys=tuple(keys))

    def apply(self, items: Iterable[Item]) -> list[Item]:
        ordered = list(items)
        # Least significant key first; list.sort is stable.
        for key in reversed(self.keys):
            present = [item for item in ordered if field_value(item, key.field) is not None]
            missing = [item for item in ordered if field_value(item, key.field) is None]
            present.sort(key=lambda item: field_value(item, key.field), reverse=key.descending)
            ordered = present + missing
        return ordered


__all__ = [
    "FilterParams",
    "Item",
    "ItemKind",
    "PriceRange",
    "SortKey",
    "SortSpec",
    "Tenant",
    "TenantKind",
    "SORTABLE_FIELDS",
    "field_value",
    "sort_field_path",
]
