"""Multi-tenancy: tenant_id partitioning.

Key components:
  - _tenant_ctx            ContextVar holding the tenant id for the current request
  - set / get / clear helpers for the ContextVar
  - validate_tenant_id()   rejects identifiers that are not plain tokens

Tenant resolution (login, sessions) happens upstream. This service only
receives the resolved identifier and passes it into every store call.
"""

import re
from contextvars import ContextVar

from zmeurel.middleware.exceptions import TenantContextError

# ── Request-scoped tenant context ───────────────────────────

_tenant_ctx: ContextVar[str | None] = ContextVar("_tenant_ctx", default=None)


def set_current_tenant_id(tenant_id: str) -> None:
    _tenant_ctx.set(tenant_id)


def get_current_tenant_id() -> str:
    """Return the current tenant id or raise if unset."""
    tenant_id = _tenant_ctx.get()
    if tenant_id is None:
        raise TenantContextError(
            "No tenant context: send the farm account id in the tenant header"
        )
    return tenant_id


def clear_tenant_context() -> None:
    _tenant_ctx.set(None)


# ── Validation ──────────────────────────────────────────────

# UUIDs and short slugs; nothing that could smuggle a cache-key separator
_TENANT_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,63}$")


def validate_tenant_id(tenant_id: str) -> str:
    """Ensure tenant ids are safe to embed in cache keys and logs."""
    if not _TENANT_RE.match(tenant_id):
        raise ValueError(f"Invalid tenant id: {tenant_id!r}")
    return tenant_id
