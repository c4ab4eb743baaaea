"""Request helpers for tenant-scoped API views."""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes  # type: ignore
from drf_spectacular.utils import OpenApiParameter  # type: ignore
from rest_framework.exceptions import ParseError  # type: ignore

TENANT_HEADER = "Tenant-Id"

# Largest value a BigAutoField primary key can hold
MAX_ID = 2**63 - 1

TENANT_HEADER_PARAMETER = OpenApiParameter(
    name=TENANT_HEADER,
    type=OpenApiTypes.INT,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Identifier of the tenant the request acts for.",
)


class TenantScopedMixin:
    """Reads the tenant identity from the request header, never from the body."""

    def get_tenant_id(self) -> int:
        cached = getattr(self, "_tenant_id", None)
        if cached is not None:
            return cached

        raw = self.request.headers.get(TENANT_HEADER, "").strip()  # type: ignore[attr-defined]
        if not raw:
            raise ParseError("Tenant ID is required.")
        try:
            tenant_id = int(raw)
        except ValueError:
            raise ParseError("Tenant ID must be an integer.")
        if tenant_id <= 0:
            raise ParseError("Tenant ID must be a positive integer.")
        if tenant_id > MAX_ID:
            raise ParseError("Tenant ID is out of range.")

        self._tenant_id = tenant_id
        return tenant_id
