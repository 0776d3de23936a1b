"""Unified exception hierarchy for catalogscope.

All errors raised by the engine inherit from CatalogScopeError and carry a
stable error code.

Note that there is no "not found" or "forbidden" error: a missing item and an
item the caller may not see both resolve to ``None``.

Usage in stores:
    from catalogscope.exceptions import StoreUnavailableError

    raise StoreUnavailableError("catalog replica unreachable", host=host)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CatalogScopeError",
    "ConfigurationError",
    "InvalidFilterValue",
    "InvalidSortSpec",
    "StoreError",
    "StoreUnavailableError",
]


# ---- Exception Hierarchy ----------------------------------------------------


class CatalogScopeError(Exception):
    """Base exception for catalogscope.

    Attributes:
        code: Stable error code string (e.g. "STORE_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(CatalogScopeError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class InvalidFilterValue(CatalogScopeError):
    """A filter parameter could not be interpreted (e.g. non-numeric price).

    Never reaches callers: the filter compiler drops the offending clause.
    """

    code: str = "INVALID_FILTER_VALUE"
    message: str = "Invalid filter value"


class InvalidSortSpec(CatalogScopeError):
    """A sort document names a field that cannot be ordered, or a bad direction."""

    code: str = "INVALID_SORT_SPEC"
    message: str = "Invalid sort specification"


class StoreError(CatalogScopeError):
    """Catalog store failure. Propagated unchanged, never retried."""

    code: str = "STORE_ERROR"
    message: str = "Catalog store failure"


class StoreUnavailableError(StoreError):
    """The catalog store could not be reached."""

    code: str = "STORE_UNAVAILABLE"
    message: str = "Catalog store unavailable"
