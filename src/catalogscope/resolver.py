"""Single-item lookup by id or by exact slug.

Both lookups apply the same visibility rule as listing. An item the caller
may not see is reported exactly like a missing one: ``None``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import Item
from .permissions.facts import PermissionFacts
from .permissions.scope import ScopeResolver
from .permissions.visibility import VisibilityPolicy
from .predicates import Clause, Operator, Predicate
from .store import CatalogStore

logger = logging.getLogger(__name__)


class SingleItemResolver:
    def __init__(self, store: CatalogStore, scope_resolver: Optional[ScopeResolver] = None) -> None:
        self.store = store
        self.scope_resolver = scope_resolver or ScopeResolver()

    def policy_for(self, facts: PermissionFacts) -> VisibilityPolicy:
        # Single-item lookups never take an explicit tenant list.
        return VisibilityPolicy.for_scope(self.scope_resolver.resolve(facts))

    def resolve_by_id(self, item_id: str, facts: PermissionFacts) -> Optional[Item]:
        item = self.store.get(item_id)
        if item is None:
            return None
        if not self.policy_for(facts).allows(item):
            logger.debug("Item %s hidden from caller in tenant %s", item_id, facts.current_tenant_id)
            return None
        return item

    def resolve_by_slug(self, slug: str, tenant_id: str, facts: PermissionFacts) -> Optional[Item]:
        """Exact, case-sensitive slug match within ``tenant_id``."""
        if not slug:
            return None
        lookup = Predicate.of(
            Clause("tenant_id", Operator.EQ, tenant_id),
            Clause("slug", Operator.EQ, slug),
        )
        predicate = self.policy_for(facts).merge(lookup)
        for item in self.store.find(predicate):
            # Re-checked here: a database store may compare slugs with a case-folding collation.
            if predicate.matches(item):
                return item
        return None

    def resolve(self, id_or_slug: str, facts: PermissionFacts) -> Optional[Item]:
        """Look up by id first, then by slug in the caller's current tenant."""
        item = self.resolve_by_id(id_or_slug, facts)
        if item is not None:
            return item
        return self.resolve_by_slug(id_or_slug, facts.current_tenant_id, facts)


__all__ = ["SingleItemResolver"]
