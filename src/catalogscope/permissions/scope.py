"""Tenant scope resolution.

Turns PermissionFacts (plus an optional explicit tenant list) into the set of
tenants a request may read from and whether non-public items are included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .constants import CallerRole
from .facts import PermissionFacts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantScope:
    """Result of scope resolution.

    Attributes:
        tenant_ids: Tenants whose items may be returned. Empty means nothing.
        can_see_non_public: Whether items with ``is_public=False`` are included.
        role: The CallerRole the decision was based on.
    """

    tenant_ids: frozenset[str]
    can_see_non_public: bool
    role: str = CallerRole.VISITOR

    @property
    def is_admin(self) -> bool:
        return self.role in CallerRole.ADMINS

    def __contains__(self, tenant_id: object) -> bool:
        return tenant_id in self.tenant_ids


class ScopeResolver:
    """Classifies the caller and derives its TenantScope.

    Rules, in order:
    1. Item manager in the current tenant, which is the primary tenant →
       platform admin: every managed tenant, non-public included.
    2. Item manager with ``catalog:manage`` in the current (merchant) tenant →
       tenant admin: the current tenant only, non-public included.
    3. Anyone else → visitor: the current tenant only, public items only.

    A non-empty explicit tenant list replaces a platform admin's scope as-is.
    Tenant admins and visitors cannot widen their scope with it.
    """

    def classify(self, facts: PermissionFacts) -> str:
        current = facts.current_tenant_id
        if facts.manages(current):
            if facts.in_primary_tenant:
                return CallerRole.PLATFORM_ADMIN
            if facts.has_elevated_capability(current):
                return CallerRole.TENANT_ADMIN
        return CallerRole.VISITOR

    def resolve(self, facts: PermissionFacts, explicit_tenant_ids: Iterable[str] = ()) -> TenantScope:
        role = self.classify(facts)
        explicit = frozenset(explicit_tenant_ids)

        if role == CallerRole.PLATFORM_ADMIN:
            tenant_ids = explicit or facts.managed_tenant_ids
            scope = TenantScope(tenant_ids=frozenset(tenant_ids), can_see_non_public=True, role=role)
        elif role == CallerRole.TENANT_ADMIN:
            scope = TenantScope(tenant_ids=frozenset({facts.current_tenant_id}), can_see_non_public=True, role=role)
        else:
            scope = TenantScope(tenant_ids=frozenset({facts.current_tenant_id}), can_see_non_public=False, role=role)

        if explicit and role != CallerRole.PLATFORM_ADMIN:
            logger.debug(
                "Ignoring explicit tenant filter for %s in tenant %s",
                role,
                facts.current_tenant_id,
            )
        logger.debug(
            "Resolved %s scope: %d tenant(s), non-public=%s",
            role,
            len(scope.tenant_ids),
            scope.can_see_non_public,
        )
        return scope


_default_resolver = ScopeResolver()


def resolve_scope(facts: PermissionFacts, explicit_tenant_ids: Iterable[str] = ()) -> TenantScope:
    """Resolve a TenantScope with the default resolver."""
    return _default_resolver.resolve(facts, explicit_tenant_ids)


__all__ = [
    "ScopeResolver",
    "TenantScope",
    "resolve_scope",
]
