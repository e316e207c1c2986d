"""TenantApplicationService — tenant CRUD, room assignment and move-out.

assign_room and move_out each run in one transaction with the tenant and
room rows locked (SELECT ... FOR UPDATE), which keeps the
one-active-tenant-per-room rule intact under concurrent requests.
Balance events are published only after commit.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_balance.application.invalidation import BalanceInvalidator
from src.kost_balance.domain.events import RoomAssignmentChanged, TenantMovedOut
from src.kost_common.enums import RoomStatus
from src.kost_common.errors import (
    RoomNotAvailableError,
    RoomNotFoundError,
    RoomOccupiedError,
    TenantMovedOutError,
    TenantNotFoundError,
)
from src.kost_room.domain.repository import RoomRepositoryProtocol
from src.kost_room.infrastructure.persistence import RoomRepository
from src.kost_tenant.application.schemas import (
    TenantDetail,
    TenantListResponse,
    cursor_decode,
    cursor_encode,
)
from src.kost_tenant.domain.repository import TenantRepositoryProtocol
from src.kost_tenant.infrastructure.persistence import TenantRepository

logger = logging.getLogger("kost.tenant")


class TenantApplicationService:
    def __init__(
        self,
        repo: TenantRepositoryProtocol | None = None,
        room_repo: RoomRepositoryProtocol | None = None,
        invalidator: BalanceInvalidator | None = None,
    ) -> None:
        self._repo: TenantRepositoryProtocol = repo or TenantRepository()
        self._room_repo: RoomRepositoryProtocol = room_repo or RoomRepository()
        self._invalidator = invalidator or BalanceInvalidator()

    async def create_tenant(
        self, db: AsyncSession, name: str, contact_info: str | None
    ) -> TenantDetail:
        try:
            tenant = await self._repo.create_tenant(db, name, contact_info)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("tenant created id=%s", tenant.id)
        return TenantDetail.from_domain(tenant)

    async def get_tenant(self, db: AsyncSession, tenant_id: str) -> TenantDetail:
        tenant = await self._repo.get_tenant_by_id(db, tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return TenantDetail.from_domain(tenant)

    async def list_tenants(
        self,
        db: AsyncSession,
        include_moved_out: bool,
        cursor: str | None,
        limit: int,
    ) -> TenantListResponse:
        cursor_ts, cursor_id = cursor_decode(cursor)
        tenants = await self._repo.list_tenants(
            db, include_moved_out, cursor_ts, cursor_id, limit + 1
        )
        has_more = len(tenants) > limit
        page = tenants[:limit]
        next_cursor = cursor_encode(page[-1]) if has_more and page else None
        return TenantListResponse(
            items=[TenantDetail.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def update_tenant(
        self,
        db: AsyncSession,
        tenant_id: str,
        name: str | None,
        contact_info: str | None,
    ) -> TenantDetail:
        try:
            current = await self._repo.get_tenant_for_update(db, tenant_id)
            if current is None:
                raise TenantNotFoundError(tenant_id)
            if not current.is_active:
                raise TenantMovedOutError(tenant_id)
            tenant = await self._repo.update_tenant(db, tenant_id, name, contact_info)
            if tenant is None:
                raise TenantNotFoundError(tenant_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return TenantDetail.from_domain(tenant)

    async def assign_room(
        self, db: AsyncSession, tenant_id: str, room_id: str
    ) -> TenantDetail:
        """Move an active tenant into a room; the previous room becomes available.

        Payment history is kept: the next balance read compares the same
        payments against the new room's rent.
        """
        try:
            tenant = await self._repo.get_tenant_for_update(db, tenant_id)
            if tenant is None:
                raise TenantNotFoundError(tenant_id)
            if not tenant.is_active:
                raise TenantMovedOutError(tenant_id)

            room = await self._room_repo.get_room_for_update(db, room_id)
            if room is None:
                raise RoomNotFoundError(room_id)

            if tenant.room_id == room_id:
                await db.commit()
                return TenantDetail.from_domain(tenant)

            if room.status == RoomStatus.UNDER_RENOVATION.value:
                raise RoomNotAvailableError(room_id, room.status)
            if room.status == RoomStatus.OCCUPIED.value:
                raise RoomOccupiedError(room_id)

            old_room_id = tenant.room_id
            if old_room_id is not None:
                await self._room_repo.set_room_status(db, old_room_id, RoomStatus.AVAILABLE.value)
            await self._room_repo.set_room_status(db, room_id, RoomStatus.OCCUPIED.value)
            updated = await self._repo.set_room(db, tenant_id, room_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "room assigned tenant=%s room=%s previous=%s", tenant_id, room_id, old_room_id
        )
        await self._invalidator.handle(
            RoomAssignmentChanged(
                tenant_id=tenant_id, old_room_id=old_room_id, new_room_id=room_id
            )
        )
        return TenantDetail.from_domain(updated)

    async def move_out(self, db: AsyncSession, tenant_id: str) -> TenantDetail:
        """Soft-delete: the record and last room_id stay, the rent is frozen, the room is freed."""
        try:
            tenant = await self._repo.get_tenant_for_update(db, tenant_id)
            if tenant is None:
                raise TenantNotFoundError(tenant_id)
            if not tenant.is_active:
                raise TenantMovedOutError(tenant_id)

            frozen_rent = None
            if tenant.room_id is not None:
                room = await self._room_repo.get_room_for_update(db, tenant.room_id)
                if room is not None:
                    frozen_rent = room.monthly_rent
                    await self._room_repo.set_room_status(
                        db, room.id, RoomStatus.AVAILABLE.value
                    )
            updated = await self._repo.mark_moved_out(db, tenant_id, frozen_rent)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("tenant moved out id=%s room=%s", tenant_id, tenant.room_id)
        await self._invalidator.handle(TenantMovedOut(tenant_id=tenant_id, room_id=tenant.room_id))
        return TenantDetail.from_domain(updated)
