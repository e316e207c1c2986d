"""BalanceEngine — derives a tenant's rent position on every call.

Single read, in order:
  1. tenant must exist                      → TenantNotFoundError (404)
  2. tenant must have a room_id             → NoRoomAssignmentError (400)
  3. moved-out tenant with a frozen rent    → use moved_out_rent, skip the room
  4. otherwise the room must exist          → BalanceInconsistentError (500, logged)
  5. sum payments, apply compute_balance()

The engine holds no state and no lock across its reads: a payment committed
between the tenant read and the payment sum simply shows up on the next read.
Store errors (connection loss etc.) propagate untouched and are never retried.
"""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_balance.domain.cache import BalanceCacheProtocol, NullBalanceCache
from src.kost_balance.domain.calculator import compute_balance
from src.kost_balance.domain.models import BalanceResult, BatchBalanceResult
from src.kost_balance.domain.repository import (
    PaymentStoreProtocol,
    RoomStoreProtocol,
    TenantStoreProtocol,
)
from src.kost_common.errors import (
    AppError,
    BalanceInconsistentError,
    NoRoomAssignmentError,
    TenantNotFoundError,
)
from src.kost_common.money import ZERO
from src.kost_room.domain.models import Room
from src.kost_tenant.domain.models import Tenant

logger = logging.getLogger("kost.balance")


def _needs_room_lookup(tenant: Tenant) -> bool:
    return tenant.room_id is not None and tenant.moved_out_rent is None


def _resolve_rent(tenant: Tenant, rooms: Mapping[str, Room]) -> Decimal:
    """Monthly rent a tenant's payments are compared against."""
    if tenant.room_id is None:
        raise NoRoomAssignmentError(tenant.id)
    if tenant.moved_out_rent is not None:
        return tenant.moved_out_rent
    room = rooms.get(tenant.room_id)
    if room is None:
        # ids only: tenant name/contact must never reach the logs
        logger.error(
            "data integrity fault: tenant=%s references missing room=%s",
            tenant.id,
            tenant.room_id,
        )
        raise BalanceInconsistentError()
    if room.monthly_rent <= ZERO:
        logger.error("data integrity fault: room=%s has non-positive rent", room.id)
        raise BalanceInconsistentError()
    return room.monthly_rent


class BalanceEngine:
    def __init__(
        self,
        tenants: TenantStoreProtocol,
        rooms: RoomStoreProtocol,
        payments: PaymentStoreProtocol,
        cache: BalanceCacheProtocol | None = None,
    ) -> None:
        self._tenants = tenants
        self._rooms = rooms
        self._payments = payments
        self._cache: BalanceCacheProtocol = cache or NullBalanceCache()

    async def calculate_balance(self, db: AsyncSession, tenant_id: str) -> BalanceResult:
        # Generation is read before the stores: an invalidation landing mid-read
        # moves readers to a new generation, so this result is never served again
        generation = await self._cache.generation(tenant_id)
        if generation is not None:
            cached = await self._cache.get(tenant_id, generation)
            if cached is not None:
                return cached

        tenant = await self._tenants.get_tenant_by_id(db, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)

        rooms: dict[str, Room] = {}
        if _needs_room_lookup(tenant):
            room = await self._rooms.get_room_by_id(db, tenant.room_id)  # type: ignore[arg-type]
            if room is not None:
                rooms[room.id] = room
        monthly_rent = _resolve_rent(tenant, rooms)

        total_payments = await self._payments.sum_payments(db, tenant_id)
        result = compute_balance(tenant_id, monthly_rent, total_payments)
        if generation is not None:
            await self._cache.set(result, generation)
        return result

    async def calculate_balances(
        self, db: AsyncSession, tenant_ids: Iterable[str]
    ) -> BatchBalanceResult:
        """Batch variant for list views: three grouped reads, partial success.

        Bypasses the cache so one list view never mixes cached and fresh entries.
        """
        ids = list(dict.fromkeys(tenant_ids))
        batch = BatchBalanceResult()
        if not ids:
            return batch

        tenants = await self._tenants.get_tenants_by_ids(db, ids)
        room_ids = sorted(
            {t.room_id for t in tenants.values() if _needs_room_lookup(t)}  # type: ignore[misc]
        )
        rooms = await self._rooms.get_rooms_by_ids(db, room_ids)
        sums = await self._payments.sum_payments_by_tenants(db, list(tenants))

        for tenant_id in ids:
            tenant = tenants.get(tenant_id)
            if tenant is None:
                batch.errors[tenant_id] = TenantNotFoundError(tenant_id)
                continue
            try:
                monthly_rent = _resolve_rent(tenant, rooms)
            except AppError as exc:
                batch.errors[tenant_id] = exc
                continue
            batch.results[tenant_id] = compute_balance(
                tenant_id, monthly_rent, sums.get(tenant_id, ZERO)
            )
        return batch
