"""Per-request permission facts and the provider boundary.

The engine never looks up "current tenant" or "primary tenant" globally:
everything it needs about the caller arrives in a PermissionFacts value.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigurationError
from ..models import Tenant


class PermissionFacts(BaseModel):
    """Read-only facts about one caller for one request.

    Attributes:
        current_tenant_id: Tenant the caller is browsing.
        primary_tenant_id: The platform root tenant.
        managed_tenant_ids: Tenants where the caller holds the
            item-management role (``Roles.CREATE_PRODUCT``).
        elevated_tenant_ids: Tenants where the caller holds
            ``Capabilities.MANAGE_CATALOG``.
    """

    model_config = ConfigDict(frozen=True)

    current_tenant_id: str
    primary_tenant_id: str
    managed_tenant_ids: frozenset[str] = Field(default_factory=frozenset)
    elevated_tenant_ids: frozenset[str] = Field(default_factory=frozenset)

    def manages(self, tenant_id: str) -> bool:
        return tenant_id in self.managed_tenant_ids

    def has_elevated_capability(self, tenant_id: str) -> bool:
        return tenant_id in self.elevated_tenant_ids

    @property
    def in_primary_tenant(self) -> bool:
        return self.current_tenant_id == self.primary_tenant_id

    @classmethod
    def visitor(cls, tenant_id: str, primary_tenant_id: str) -> "PermissionFacts":
        """Facts for an anonymous or unprivileged caller."""
        return cls(current_tenant_id=tenant_id, primary_tenant_id=primary_tenant_id)

    @classmethod
    def build(
        cls,
        current_tenant_id: str,
        tenants: Iterable[Tenant],
        managed_tenant_ids: Iterable[str] = (),
        elevated_tenant_ids: Iterable[str] = (),
    ) -> "PermissionFacts":
        """Build facts, taking the primary tenant id from a tenant listing."""
        return cls(
            current_tenant_id=current_tenant_id,
            primary_tenant_id=primary_tenant_id(tenants),
            managed_tenant_ids=frozenset(managed_tenant_ids),
            elevated_tenant_ids=frozenset(elevated_tenant_ids),
        )


def primary_tenant_id(tenants: Iterable[Tenant]) -> str:
    """Return the id of the single primary tenant.

    Raises:
        ConfigurationError: If there is not exactly one primary tenant.
    """
    primaries = [tenant.id for tenant in tenants if tenant.is_primary]
    if len(primaries) != 1:
        raise ConfigurationError(
            f"Expected exactly one primary tenant, found {len(primaries)}",
            primary_tenant_ids=primaries,
        )
    return primaries[0]


@runtime_checkable
class PermissionFactsProvider(Protocol):
    """Supplies PermissionFacts for a caller. Implemented by the host."""

    def facts_for(self, caller_id: Optional[str]) -> PermissionFacts: ...


class StaticFactsProvider:
    """Provider returning the same facts for every caller."""

    def __init__(self, facts: PermissionFacts) -> None:
        self.facts = facts

    def facts_for(self, caller_id: Optional[str]) -> PermissionFacts:
        return self.facts


__all__ = [
    "PermissionFacts",
    "PermissionFactsProvider",
    "StaticFactsProvider",
    "primary_tenant_id",
]
