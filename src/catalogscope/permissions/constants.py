"""Role, capability and caller-class constants for catalog visibility.

Provides:
- ``Roles``: role names granted per tenant by the permission store.
- ``Capabilities``: elevated capabilities checked per tenant.
- ``CallerRole``: the caller classes the scope resolver distinguishes.
"""

from __future__ import annotations


class Roles:
    """Per-tenant role names.

    The permission store reports, for each caller, the tenants in which
    they hold ``CREATE_PRODUCT``; those become
    ``PermissionFacts.managed_tenant_ids``.
    """

    CREATE_PRODUCT = "createProduct"  # Item-management role

    ALL = (CREATE_PRODUCT,)


class Capabilities:
    """Elevated capabilities, format ``{domain}:{action}``.

    Holding ``MANAGE_CATALOG`` in a merchant tenant (together with the
    item-management role) makes the caller a tenant admin there.
    """

    MANAGE_CATALOG = "catalog:manage"

    ALL = (MANAGE_CATALOG,)


class CallerRole:
    """Caller classes, most privileged first."""

    PLATFORM_ADMIN = "platform_admin"  # Item manager in the primary tenant
    TENANT_ADMIN = "tenant_admin"  # Item manager + MANAGE_CATALOG in a merchant tenant
    VISITOR = "visitor"  # Everyone else

    ADMINS = (PLATFORM_ADMIN, TENANT_ADMIN)
    ALL = (PLATFORM_ADMIN, TENANT_ADMIN, VISITOR)


__all__ = [
    "CallerRole",
    "Capabilities",
    "Roles",
]
