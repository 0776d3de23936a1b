"""Request surface: list and detail lookups over the catalog.

CatalogService wires the pieces together for one request:

    facts  = provider.facts_for(caller_id)
    scope  = ScopeResolver.resolve(facts, filters.explicit_tenant_ids)
    filter = FilterCompiler.compile(filters)
    query  = VisibilityPolicy.for_scope(scope).merge(filter)
    items  = QueryExecutor.execute(query, limit, sort)

Nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import CatalogConfig
from .executor import QueryExecutor
from .filters import FilterCompiler
from .logging import get_catalog_logger, safe_preview
from .models import FilterParams, Item, SortSpec
from .permissions.facts import PermissionFactsProvider
from .permissions.scope import ScopeResolver
from .permissions.visibility import VisibilityPolicy
from .resolver import SingleItemResolver
from .store import CatalogStore


def _sort_option(options: Optional[Mapping[str, Any]]) -> Optional[SortSpec]:
    if not options:
        return None
    sort = options.get("sort")
    if sort is None or isinstance(sort, SortSpec):
        return sort
    return SortSpec.from_mapping(sort)


class CatalogService:
    """Catalog list/detail entry points scoped by caller permissions.

    Args:
        store: Catalog store collaborator.
        facts_provider: Supplies PermissionFacts per caller.
        config: Paging settings (defaults to CatalogConfig()).
    """

    def __init__(
        self,
        store: CatalogStore,
        facts_provider: PermissionFactsProvider,
        config: Optional[CatalogConfig] = None,
    ) -> None:
        self.store = store
        self.facts_provider = facts_provider
        self.config = config or CatalogConfig()
        self.scope_resolver = ScopeResolver()
        self.filter_compiler = FilterCompiler()
        self.executor = QueryExecutor(store)
        self.item_resolver = SingleItemResolver(store, self.scope_resolver)

    def list_items(
        self,
        limit: Optional[int] = None,
        filters: FilterParams | Mapping[str, Any] | None = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        caller_id: Optional[str] = None,
    ) -> list[Item]:
        """List items visible to the caller that match ``filters``.

        Args:
            limit: Maximum number of items (default: config.default_page_size).
            filters: FilterParams or a raw filter document
                (``{"query": ..., "price.min": ..., "price.max": ..., "shops": [...]}``).
            options: Extra options; ``"sort"`` takes a SortSpec or a
                ``{field: 1 | -1}`` mapping.
            caller_id: Passed to the permission-fact provider.

        Returns:
            Matching items, at most ``limit``.

        Raises:
            InvalidSortSpec: If the sort document names an unorderable field.
        """
        facts = self.facts_provider.facts_for(caller_id)
        log = get_catalog_logger(__name__, tenant_id=facts.current_tenant_id)
        params = FilterParams.from_mapping(filters)

        scope = self.scope_resolver.resolve(facts, params.explicit_tenant_ids)
        filter_predicate = self.filter_compiler.compile(params, honor_tenant_restriction=scope.is_admin)
        predicate = VisibilityPolicy.for_scope(scope).merge(filter_predicate)

        effective_limit = self.config.effective_limit(limit)
        items = list(self.executor.execute(predicate, limit=effective_limit, sort=_sort_option(options)))
        log.info(
            "Listed %d item(s) as %s (query=%r, limit=%d)",
            len(items),
            scope.role,
            safe_preview(params.query_text, 60),
            effective_limit,
        )
        return items

    def get_item(self, id_or_slug: str, *, caller_id: Optional[str] = None) -> Optional[Item]:
        """Fetch one item by id or exact slug; None if missing or not visible."""
        facts = self.facts_provider.facts_for(caller_id)
        log = get_catalog_logger(__name__, tenant_id=facts.current_tenant_id)
        item = self.item_resolver.resolve(id_or_slug, facts)
        log.debug("Lookup %s: %s", safe_preview(id_or_slug, 60), "found" if item is not None else "none")
        return item


__all__ = ["CatalogService"]
