"""RoomRepository — concrete implementation of RoomRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
Transaction ownership stays with the calling application service.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.errors import InternalError
from src.kost_room.domain.models import Room

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_ROOM_SQL = text("""
    SELECT id, room_number, room_type, monthly_rent, status, created_at, updated_at
    FROM rooms
    WHERE id = :room_id
""")

_GET_ROOM_FOR_UPDATE_SQL = text("""
    SELECT id, room_number, room_type, monthly_rent, status, created_at, updated_at
    FROM rooms
    WHERE id = :room_id
    FOR UPDATE
""")

_GET_ROOM_BY_NUMBER_SQL = text("""
    SELECT id, room_number, room_type, monthly_rent, status, created_at, updated_at
    FROM rooms
    WHERE room_number = :room_number
""")

_GET_ROOMS_BY_IDS_SQL = text("""
    SELECT id, room_number, room_type, monthly_rent, status, created_at, updated_at
    FROM rooms
    WHERE id = ANY(:room_ids)
""")

_LIST_ROOMS_SQL = text("""
    SELECT id, room_number, room_type, monthly_rent, status, created_at, updated_at
    FROM rooms
    WHERE
        (CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT))
        AND (
            CAST(:cursor_room_number AS TEXT) IS NULL
            OR room_number > CAST(:cursor_room_number AS TEXT)
        )
    ORDER BY room_number
    LIMIT :limit
""")

_INSERT_ROOM_SQL = text("""
    INSERT INTO rooms (room_number, room_type, monthly_rent, status)
    VALUES (:room_number, :room_type, :monthly_rent, :status)
    RETURNING id, room_number, room_type, monthly_rent, status, created_at, updated_at
""")

_UPDATE_ROOM_SQL = text("""
    UPDATE rooms
    SET room_type    = COALESCE(CAST(:room_type AS VARCHAR), room_type),
        monthly_rent = COALESCE(CAST(:monthly_rent AS NUMERIC(14, 2)), monthly_rent),
        status       = COALESCE(CAST(:status AS VARCHAR), status)
    WHERE id = :room_id
    RETURNING id, room_number, room_type, monthly_rent, status, created_at, updated_at
""")

_SET_STATUS_SQL = text("""
    UPDATE rooms
    SET status = :status
    WHERE id = :room_id
    RETURNING id
""")

_DELETE_ROOM_SQL = text("""
    DELETE FROM rooms
    WHERE id = :room_id
    RETURNING id
""")

_COUNT_TENANT_REFS_SQL = text("""
    SELECT COUNT(*) AS n
    FROM tenants
    WHERE room_id = :room_id
""")

_ACTIVE_TENANT_SQL = text("""
    SELECT id
    FROM tenants
    WHERE room_id = :room_id AND moved_out_at IS NULL
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_room(row: object) -> Room:
    return Room(
        id=str(row.id),  # type: ignore[attr-defined]
        room_number=row.room_number,  # type: ignore[attr-defined]
        room_type=row.room_type,  # type: ignore[attr-defined]
        monthly_rent=Decimal(row.monthly_rent),  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class RoomRepository:
    """Concrete repository for the rooms table."""

    async def get_room_by_id(self, db: AsyncSession, room_id: str) -> Room | None:
        result = await db.execute(_GET_ROOM_SQL, {"room_id": room_id})
        row = result.fetchone()
        return _row_to_room(row) if row else None

    async def get_room_for_update(self, db: AsyncSession, room_id: str) -> Room | None:
        """Row-locks the room until the caller's transaction ends."""
        result = await db.execute(_GET_ROOM_FOR_UPDATE_SQL, {"room_id": room_id})
        row = result.fetchone()
        return _row_to_room(row) if row else None

    async def get_room_by_number(self, db: AsyncSession, room_number: str) -> Room | None:
        result = await db.execute(_GET_ROOM_BY_NUMBER_SQL, {"room_number": room_number})
        row = result.fetchone()
        return _row_to_room(row) if row else None

    async def get_rooms_by_ids(
        self, db: AsyncSession, room_ids: list[str]
    ) -> dict[str, Room]:
        if not room_ids:
            return {}
        result = await db.execute(_GET_ROOMS_BY_IDS_SQL, {"room_ids": room_ids})
        rooms = [_row_to_room(row) for row in result.fetchall()]
        return {room.id: room for room in rooms}

    async def list_rooms(
        self,
        db: AsyncSession,
        status: str | None,
        cursor_room_number: str | None,
        limit: int,
    ) -> list[Room]:
        result = await db.execute(
            _LIST_ROOMS_SQL,
            {
                "status": status,
                "cursor_room_number": cursor_room_number,
                "limit": limit,
            },
        )
        return [_row_to_room(row) for row in result.fetchall()]

    async def create_room(
        self,
        db: AsyncSession,
        room_number: str,
        room_type: str,
        monthly_rent: Decimal,
        status: str,
    ) -> Room:
        result = await db.execute(
            _INSERT_ROOM_SQL,
            {
                "room_number": room_number,
                "room_type": room_type,
                "monthly_rent": monthly_rent,
                "status": status,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Room insert returned no rows")
        return _row_to_room(row)

    async def update_room(
        self,
        db: AsyncSession,
        room_id: str,
        room_type: str | None,
        monthly_rent: Decimal | None,
        status: str | None,
    ) -> Room | None:
        result = await db.execute(
            _UPDATE_ROOM_SQL,
            {
                "room_id": room_id,
                "room_type": room_type,
                "monthly_rent": monthly_rent,
                "status": status,
            },
        )
        row = result.fetchone()
        return _row_to_room(row) if row else None

    async def set_room_status(self, db: AsyncSession, room_id: str, status: str) -> None:
        result = await db.execute(_SET_STATUS_SQL, {"room_id": room_id, "status": status})
        if result.fetchone() is None:
            raise InternalError(f"Room status update matched no rows: {room_id}")

    async def delete_room(self, db: AsyncSession, room_id: str) -> bool:
        result = await db.execute(_DELETE_ROOM_SQL, {"room_id": room_id})
        return result.fetchone() is not None

    async def count_tenant_references(self, db: AsyncSession, room_id: str) -> int:
        result = await db.execute(_COUNT_TENANT_REFS_SQL, {"room_id": room_id})
        row = result.fetchone()
        return int(row.n) if row else 0

    async def get_active_tenant_id(self, db: AsyncSession, room_id: str) -> str | None:
        result = await db.execute(_ACTIVE_TENANT_SQL, {"room_id": room_id})
        row = result.fetchone()
        return str(row.id) if row else None
