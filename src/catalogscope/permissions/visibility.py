"""Visibility gating: tenant scope and public flag merged with search filters."""

from __future__ import annotations

from typing import Any, Optional

from ..predicates import Clause, Operator, Predicate
from .scope import TenantScope


class VisibilityPolicy:
    """Builds the final predicate for a request.

    For an item ``x``::

        x.tenant_id in tenant_ids
        AND (can_see_non_public OR x.is_public)
        AND filter_predicate(x)
    """

    __slots__ = ("tenant_ids", "can_see_non_public")

    def __init__(self, tenant_ids: frozenset[str], can_see_non_public: bool) -> None:
        self.tenant_ids = frozenset(tenant_ids)
        self.can_see_non_public = can_see_non_public

    @classmethod
    def for_scope(cls, scope: TenantScope) -> "VisibilityPolicy":
        return cls(scope.tenant_ids, scope.can_see_non_public)

    def predicate(self) -> Predicate:
        clauses = [Clause("tenant_id", Operator.IN, self.tenant_ids)]
        if not self.can_see_non_public:
            clauses.append(Clause("is_public", Operator.EQ, True))
        return Predicate(tuple(clauses))

    def merge(self, filter_predicate: Optional[Predicate] = None) -> Predicate:
        if filter_predicate is None:
            return self.predicate()
        return self.predicate() & filter_predicate

    def allows(self, item: Any) -> bool:
        return self.predicate().matches(item)

    def __repr__(self) -> str:
        return (
            f"VisibilityPolicy(tenant_ids={sorted(self.tenant_ids)!r}, "
            f"can_see_non_public={self.can_see_non_public!r})"
        )


def merge(
    tenant_scope: TenantScope | frozenset[str],
    can_see_non_public: Optional[bool] = None,
    filter_predicate: Optional[Predicate] = None,
) -> Predicate:
    """Merge a tenant scope, the non-public gate and a filter predicate.

    ``tenant_scope`` may be a TenantScope (its own flag is used unless
    ``can_see_non_public`` is given) or a bare set of tenant ids.
    """
    if isinstance(tenant_scope, TenantScope):
        tenant_ids = tenant_scope.tenant_ids
        if can_see_non_public is None:
            can_see_non_public = tenant_scope.can_see_non_public
    else:
        tenant_ids = frozenset(tenant_scope)
    return VisibilityPolicy(tenant_ids, bool(can_see_non_public)).merge(filter_predicate)


__all__ = [
    "VisibilityPolicy",
    "merge",
]
