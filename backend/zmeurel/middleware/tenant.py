"""Tenant middleware: resolves tenant context from a request header.

Flow:
  1. Read the tenant header (``settings.tenant_header``, X-Tenant-ID)
  2. Validate the identifier
  3. Set ContextVar so downstream code (get_current_tenant_id, cache keys) can read it
  4. After the response, clear the ContextVar

Routes that don't require tenant scope (health, docs) simply won't depend
on get_current_tenant_id(), so having no tenant context is fine for them.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from zmeurel.config import settings
from zmeurel.middleware.exceptions import create_error_response
from zmeurel.tenancy import (
    clear_tenant_context,
    set_current_tenant_id,
    validate_tenant_id,
)


class TenantMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        tenant_id = request.headers.get(settings.tenant_header, "").strip()

        if tenant_id:
            try:
                validate_tenant_id(tenant_id)
            except ValueError:
                clear_tenant_context()
                return create_error_response(
                    status_code=400,
                    message="Malformed tenant identifier",
                    error_code="TENANT_CONTEXT_INVALID",
                )
            set_current_tenant_id(tenant_id)
        else:
            clear_tenant_context()

        try:
            response = await call_next(request)
        finally:
            clear_tenant_context()

        return response
