"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_tenant.domain.models import Tenant


class TenantRepositoryProtocol(Protocol):
    async def get_tenant_by_id(self, db: AsyncSession, tenant_id: str) -> Tenant | None: ...

    async def get_tenant_for_update(
        self, db: AsyncSession, tenant_id: str
    ) -> Tenant | None: ...

    async def get_tenants_by_ids(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Tenant]: ...

    async def list_tenants(
        self,
        db: AsyncSession,
        include_moved_out: bool,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Tenant]: ...

    async def list_tenant_ids_with_room(
        self, db: AsyncSession, include_moved_out: bool
    ) -> list[str]: ...

    async def create_tenant(
        self, db: AsyncSession, name: str, contact_info: str | None
    ) -> Tenant: ...

    async def update_tenant(
        self,
        db: AsyncSession,
        tenant_id: str,
        name: str | None,
        contact_info: str | None,
    ) -> Tenant | None: ...

    async def set_room(self, db: AsyncSession, tenant_id: str, room_id: str) -> Tenant: ...

    async def mark_moved_out(
        self, db: AsyncSession, tenant_id: str, moved_out_rent: Decimal | None
    ) -> Tenant: ...
