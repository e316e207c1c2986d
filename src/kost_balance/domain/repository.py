"""Read-only store Protocols the Balance Engine depends on.

TenantRepository, RoomRepository and PaymentRepository satisfy these
structurally. Each batch method is a single grouped query so a list view
costs three round trips regardless of how many tenants it shows.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_room.domain.models import Room
from src.kost_tenant.domain.models import Tenant


class TenantStoreProtocol(Protocol):
    async def get_tenant_by_id(self, db: AsyncSession, tenant_id: str) -> Tenant | None: ...

    async def get_tenants_by_ids(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Tenant]: ...


class RoomStoreProtocol(Protocol):
    async def get_room_by_id(self, db: AsyncSession, room_id: str) -> Room | None: ...

    async def get_rooms_by_ids(
        self, db: AsyncSession, room_ids: list[str]
    ) -> dict[str, Room]: ...


class PaymentStoreProtocol(Protocol):
    async def sum_payments(self, db: AsyncSession, tenant_id: str) -> Decimal: ...

    async def sum_payments_by_tenants(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Decimal]: ...
