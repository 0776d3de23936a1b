"""catalogscope: multi-tenant catalog visibility and filter engine."""

from .config import CatalogConfig, LogLevel, load_catalog_config_from_env
from .exceptions import (
    CatalogScopeError,
    ConfigurationError,
    InvalidFilterValue,
    InvalidSortSpec,
    StoreError,
    StoreUnavailableError,
)
from .executor import QueryExecutor
from .filters import FilterCompiler, compile_filters, parse_price_bound
from .logging import (
    CatalogFormatter,
    CatalogLoggerAdapter,
    get_catalog_logger,
    safe_preview,
    setup_logging,
)
from .models import (
    FilterParams,
    Item,
    ItemKind,
    PriceRange,
    SortKey,
    SortSpec,
    Tenant,
    TenantKind,
)
from .permissions import (
    CallerRole,
    Capabilities,
    PermissionFacts,
    PermissionFactsProvider,
    Roles,
    ScopeResolver,
    StaticFactsProvider,
    TenantScope,
    VisibilityPolicy,
    resolve_scope,
)
from .predicates import Clause, Operator, Predicate
from .resolver import SingleItemResolver
from .service import CatalogService
from .store import CatalogStore, InMemoryCatalogStore

__all__ = [
    'CallerRole',
    'Capabilities',
    'CatalogConfig',
    'CatalogFormatter',
    'CatalogLoggerAdapter',
    'CatalogScopeError',
    'CatalogService',
    'CatalogStore',
    'Clause',
    'ConfigurationError',
    'FilterCompiler',
    'FilterParams',
    'InMemoryCatalogStore',
    'InvalidFilterValue',
    'InvalidSortSpec',
    'Item',
    'ItemKind',
    'LogLevel',
    'Operator',
    'PermissionFacts',
    'PermissionFactsProvider',
    'Predicate',
    'PriceRange',
    'QueryExecutor',
    'Roles',
    'ScopeResolver',
    'SingleItemResolver',
    'SortKey',
    'SortSpec',
    'StaticFactsProvider',
    'StoreError',
    'StoreUnavailableError',
    'Tenant',
    'TenantKind',
    'TenantScope',
    'VisibilityPolicy',
    'compile_filters',
    'get_catalog_logger',
    'load_catalog_config_from_env',
    'parse_price_bound',
    'resolve_scope',
    'safe_preview',
    'setup_logging',
]
