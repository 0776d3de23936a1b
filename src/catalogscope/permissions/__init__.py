"""Caller permission facts, tenant scope resolution and visibility gating.

Defines:
- Roles / Capabilities / CallerRole: permission vocabulary
- PermissionFacts: what the engine knows about the caller
- ScopeResolver / resolve_scope(): tenants a caller may read
- VisibilityPolicy / merge(): final visibility predicate
"""

from .constants import CallerRole, Capabilities, Roles
from .facts import (
    PermissionFacts,
    PermissionFactsProvider,
    StaticFactsProvider,
    primary_tenant_id,
)
from .scope import ScopeResolver, TenantScope, resolve_scope
from .visibility import VisibilityPolicy, merge

__all__ = [
    "CallerRole",
    "Capabilities",
    "PermissionFacts",
    "PermissionFactsProvider",
    "Roles",
    "ScopeResolver",
    "StaticFactsProvider",
    "TenantScope",
    "VisibilityPolicy",
    "merge",
    "primary_tenant_id",
    "resolve_scope",
]
