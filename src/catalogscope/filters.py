"""Search filter compilation.

Turns FilterParams into a Predicate of independent, optional clauses:

- text: ``title`` contains ``query_text``, case-insensitively
- price: the item's price range overlaps ``[price_min, price_max]``;
  items without a price range never match
- tenants: ``tenant_id`` in ``explicit_tenant_ids``

A clause whose input is absent does not narrow the result. A price bound that
cannot be parsed is treated as absent.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from .exceptions import InvalidFilterValue
from .logging import safe_preview
from .models import FilterParams
from .predicates import Clause, Operator, Predicate

logger = logging.getLogger(__name__)


def parse_price_bound(raw: Any, name: str = "price") -> Optional[float]:
    """Parse a price bound from a number or numeric string.

    Returns None for absent values (None or blank strings).

    Raises:
        InvalidFilterValue: If the value is not a finite number.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    if isinstance(raw, bool):
        raise InvalidFilterValue(f"{name} must be numeric, got a boolean", field=name, value=raw)
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise InvalidFilterValue(f"{name} is not a number: {safe_preview(raw, 40)}", field=name, value=raw)
    if not math.isfinite(value):
        raise InvalidFilterValue(f"{name} must be finite, got {value}", field=name, value=raw)
    return value


class FilterCompiler:
    """Compiles FilterParams into a Predicate. Independent of caller identity."""

    def compile(
        self,
        params: FilterParams | Mapping[str, Any] | None,
        honor_tenant_restriction: bool = True,
    ) -> Predicate:
        """Compile filter params.

        Args:
            params: FilterParams or a raw filter document.
            honor_tenant_restriction: Emit the explicit-tenant clause. Callers
                whose scope cannot be narrowed or widened pass False.

        Returns:
            Conjunction of the clauses that are present (possibly empty).
        """
        params = FilterParams.from_mapping(params)
        clauses: list[Clause] = []
        clauses.extend(self.text_clauses(params.query_text))
        clauses.extend(self.price_clauses(params.price_min, params.price_max))
        if honor_tenant_restriction:
            clauses.extend(self.tenant_clauses(params.explicit_tenant_ids))
        return Predicate(tuple(clauses))

    def text_clauses(self, query_text: Optional[str]) -> list[Clause]:
        if not query_text:
            return []
        return [Clause("title", Operator.CONTAINS_CI, query_text)]

    def price_clauses(self, raw_min: Any, raw_max: Any) -> list[Clause]:
        price_min = self._bound(raw_min, "price.min")
        price_max = self._bound(raw_max, "price.max")
        if price_min is None and price_max is None:
            return []

        # Interval overlap: item.min <= max AND item.max >= min.
        clauses = [Clause("price_range", Operator.EXISTS, True)]
        if price_max is not None:
            clauses.append(Clause("price_range.min", Operator.LTE, price_max))
        if price_min is not None:
            clauses.append(Clause("price_range.max", Operator.GTE, price_min))
        return clauses

    def tenant_clauses(self, tenant_ids: tuple[str, ...]) -> list[Clause]:
        if not tenant_ids:
            return []
        return [Clause("tenant_id", Operator.IN, frozenset(tenant_ids))]

    def _bound(self, raw: Any, name: str) -> Optional[float]:
        try:
            return parse_price_bound(raw, name)
        except InvalidFilterValue as e:
            logger.warning("Dropping %s filter: %s", name, e.message)
            return None


_default_compiler = FilterCompiler()


def compile_filters(
    params: FilterParams | Mapping[str, Any] | None,
    honor_tenant_restriction: bool = True,
) -> Predicate:
    """Compile filter params with the default compiler."""
    return _default_compiler.compile(params, honor_tenant_restriction=honor_tenant_restriction)


__all__ = [
    "FilterCompiler",
    "compile_filters",
    "parse_price_bound",
]
