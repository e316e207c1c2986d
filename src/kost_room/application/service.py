"""RoomApplicationService — Room CRUD.

Mutations commit inside the service and roll back on any error.
`occupied` is owned by tenant assignment; this service only toggles
between `available` and `under_renovation`.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_balance.application.invalidation import BalanceInvalidator
from src.kost_balance.domain.events import RoomRentChanged
from src.kost_common.enums import RoomStatus
from src.kost_common.errors import (
    InvalidRoomStatusError,
    RoomInUseError,
    RoomNotFoundError,
    RoomNumberExistsError,
)
from src.kost_room.application.schemas import (
    RoomDetail,
    RoomListResponse,
    cursor_decode,
    cursor_encode,
)
from src.kost_room.domain.repository import RoomRepositoryProtocol
from src.kost_room.infrastructure.persistence import RoomRepository

logger = logging.getLogger("kost.room")


class RoomApplicationService:
    def __init__(
        self,
        repo: RoomRepositoryProtocol | None = None,
        invalidator: BalanceInvalidator | None = None,
    ) -> None:
        self._repo: RoomRepositoryProtocol = repo or RoomRepository()
        self._invalidator = invalidator or BalanceInvalidator()

    async def create_room(
        self,
        db: AsyncSession,
        room_number: str,
        room_type: str,
        monthly_rent: Decimal,
        status: RoomStatus = RoomStatus.AVAILABLE,
    ) -> RoomDetail:
        if status == RoomStatus.OCCUPIED:
            raise InvalidRoomStatusError("a new room cannot start occupied")
        try:
            if await self._repo.get_room_by_number(db, room_number) is not None:
                raise RoomNumberExistsError(room_number)
            room = await self._repo.create_room(
                db, room_number, room_type, monthly_rent, status.value
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("room created id=%s", room.id)
        return RoomDetail.from_domain(room)

    async def get_room(self, db: AsyncSession, room_id: str) -> RoomDetail:
        room = await self._repo.get_room_by_id(db, room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return RoomDetail.from_domain(room)

    async def list_rooms(
        self,
        db: AsyncSession,
        status: str | None,
        cursor: str | None,
        limit: int,
    ) -> RoomListResponse:
        cursor_room_number = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without COUNT(*)
        rooms = await self._repo.list_rooms(db, status, cursor_room_number, limit + 1)
        has_more = len(rooms) > limit
        page = rooms[:limit]
        next_cursor = cursor_encode(page[-1]) if has_more and page else None
        return RoomListResponse(
            items=[RoomDetail.from_domain(r) for r in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def update_room(
        self,
        db: AsyncSession,
        room_id: str,
        room_type: str | None = None,
        monthly_rent: Decimal | None = None,
        status: RoomStatus | None = None,
    ) -> RoomDetail:
        try:
            current = await self._repo.get_room_for_update(db, room_id)
            if current is None:
                raise RoomNotFoundError(room_id)
            active_tenant_id = await self._repo.get_active_tenant_id(db, room_id)

            if status is not None and status.value != current.status:
                if status == RoomStatus.OCCUPIED:
                    raise InvalidRoomStatusError("occupied is set by assigning a tenant")
                if active_tenant_id is not None:
                    raise InvalidRoomStatusError("room has an active tenant")

            room = await self._repo.update_room(
                db,
                room_id,
                room_type,
                monthly_rent,
                status.value if status is not None else None,
            )
            if room is None:
                raise RoomNotFoundError(room_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if active_tenant_id is not None and room.monthly_rent != current.monthly_rent:
            await self._invalidator.handle(
                RoomRentChanged(
                    room_id=room_id,
                    tenant_id=active_tenant_id,
                    old_rent=current.monthly_rent,
                    new_rent=room.monthly_rent,
                )
            )
        return RoomDetail.from_domain(room)

    async def delete_room(self, db: AsyncSession, room_id: str) -> None:
        try:
            if await self._repo.get_room_for_update(db, room_id) is None:
                raise RoomNotFoundError(room_id)
            # Moved-out tenants keep their last room_id, so history pins the room too
            if await self._repo.count_tenant_references(db, room_id) > 0:
                raise RoomInUseError(room_id)
            await self._repo.delete_room(db, room_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("room deleted id=%s", room_id)
