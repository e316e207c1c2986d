"""TenantRepository — concrete implementation of TenantRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
Tenants are never deleted: move-out sets moved_out_at and freezes the rent.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.errors import InternalError, TenantNotFoundError
from src.kost_tenant.domain.models import Tenant

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_TENANT_SQL = text("""
    SELECT id, name, contact_info, room_id, moved_out_at, moved_out_rent,
           created_at, updated_at
    FROM tenants
    WHERE id = :tenant_id
""")

_GET_TENANT_FOR_UPDATE_SQL = text("""
    SELECT id, name, contact_info, room_id, moved_out_at, moved_out_rent,
           created_at, updated_at
    FROM tenants
    WHERE id = :tenant_id
    FOR UPDATE
""")

_GET_TENANTS_BY_IDS_SQL = text("""
    SELECT id, name, contact_info, room_id, moved_out_at, moved_out_rent,
           created_at, updated_at
    FROM tenants
    WHERE id = ANY(:tenant_ids)
""")

_LIST_TENANTS_SQL = text("""
    SELECT id, name, contact_info, room_id, moved_out_at, moved_out_rent,
           created_at, updated_at
    FROM tenants
    WHERE
        (CAST(:include_moved_out AS BOOLEAN) OR moved_out_at IS NULL)
        AND (
            CAST(:cursor_ts AS TIMESTAMPTZ) IS NULL
            OR created_at < CAST(:cursor_ts AS TIMESTAMPTZ)
            OR (
                created_at = CAST(:cursor_ts AS TIMESTAMPTZ)
                AND id < CAST(:cursor_id AS UUID)
            )
        )
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_LIST_IDS_WITH_ROOM_SQL = text("""
    SELECT id
    FROM tenants
    WHERE room_id IS NOT NULL
      AND (CAST(:include_moved_out AS BOOLEAN) OR moved_out_at IS NULL)
    ORDER BY created_at DESC, id DESC
""")

_INSERT_TENANT_SQL = text("""
    INSERT INTO tenants (name, contact_info)
    VALUES (:name, :contact_info)
    RETURNING id, name, contact_info, room_id, moved_out_at, moved_out_rent,
              created_at, updated_at
""")

_UPDATE_TENANT_SQL = text("""
    UPDATE tenants
    SET name         = COALESCE(CAST(:name AS VARCHAR), name),
        contact_info = COALESCE(CAST(:contact_info AS VARCHAR), contact_info)
    WHERE id = :tenant_id
    RETURNING id, name, contact_info, room_id, moved_out_at, moved_out_rent,
              created_at, updated_at
""")

_SET_ROOM_SQL = text("""
    UPDATE tenants
    SET room_id = :room_id
    WHERE id = :tenant_id AND moved_out_at IS NULL
    RETURNING id, name, contact_info, room_id, moved_out_at, moved_out_rent,
              created_at, updated_at
""")

_MARK_MOVED_OUT_SQL = text("""
    UPDATE tenants
    SET moved_out_at   = NOW(),
        moved_out_rent = :moved_out_rent
    WHERE id = :tenant_id AND moved_out_at IS NULL
    RETURNING id, name, contact_info, room_id, moved_out_at, moved_out_rent,
              created_at, updated_at
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_tenant(row: object) -> Tenant:
    room_id = row.room_id  # type: ignore[attr-defined]
    moved_out_rent = row.moved_out_rent  # type: ignore[attr-defined]
    return Tenant(
        id=str(row.id),  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        contact_info=row.contact_info,  # type: ignore[attr-defined]
        room_id=str(room_id) if room_id is not None else None,
        moved_out_at=row.moved_out_at,  # type: ignore[attr-defined]
        moved_out_rent=Decimal(moved_out_rent) if moved_out_rent is not None else None,
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TenantRepository:
    """Concrete repository for the tenants table."""

    async def get_tenant_by_id(self, db: AsyncSession, tenant_id: str) -> Tenant | None:
        result = await db.execute(_GET_TENANT_SQL, {"tenant_id": tenant_id})
        row = result.fetchone()
        return _row_to_tenant(row) if row else None

    async def get_tenant_for_update(
        self, db: AsyncSession, tenant_id: str
    ) -> Tenant | None:
        result = await db.execute(_GET_TENANT_FOR_UPDATE_SQL, {"tenant_id": tenant_id})
        row = result.fetchone()
        return _row_to_tenant(row) if row else None

    async def get_tenants_by_ids(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Tenant]:
        if not tenant_ids:
            return {}
        result = await db.execute(_GET_TENANTS_BY_IDS_SQL, {"tenant_ids": tenant_ids})
        tenants = [_row_to_tenant(row) for row in result.fetchall()]
        return {t.id: t for t in tenants}

    async def list_tenants(
        self,
        db: AsyncSession,
        include_moved_out: bool,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Tenant]:
        result = await db.execute(
            _LIST_TENANTS_SQL,
            {
                "include_moved_out": include_moved_out,
                "cursor_ts": cursor_ts,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        return [_row_to_tenant(row) for row in result.fetchall()]

    async def list_tenant_ids_with_room(
        self, db: AsyncSession, include_moved_out: bool
    ) -> list[str]:
        result = await db.execute(
            _LIST_IDS_WITH_ROOM_SQL, {"include_moved_out": include_moved_out}
        )
        return [str(row.id) for row in result.fetchall()]

    async def create_tenant(
        self, db: AsyncSession, name: str, contact_info: str | None
    ) -> Tenant:
        result = await db.execute(
            _INSERT_TENANT_SQL, {"name": name, "contact_info": contact_info}
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Tenant insert returned no rows")
        return _row_to_tenant(row)

    async def update_tenant(
        self,
        db: AsyncSession,
        tenant_id: str,
        name: str | None,
        contact_info: str | None,
    ) -> Tenant | None:
        result = await db.execute(
            _UPDATE_TENANT_SQL,
            {"tenant_id": tenant_id, "name": name, "contact_info": contact_info},
        )
        row = result.fetchone()
        return _row_to_tenant(row) if row else None

    async def set_room(self, db: AsyncSession, tenant_id: str, room_id: str) -> Tenant:
        result = await db.execute(_SET_ROOM_SQL, {"tenant_id": tenant_id, "room_id": room_id})
        row = result.fetchone()
        if row is None:
            raise TenantNotFoundError(tenant_id)
        return _row_to_tenant(row)

    async def mark_moved_out(
        self, db: AsyncSession, tenant_id: str, moved_out_rent: Decimal | None
    ) -> Tenant:
        result = await db.execute(
            _MARK_MOVED_OUT_SQL,
            {"tenant_id": tenant_id, "moved_out_rent": moved_out_rent},
        )
        row = result.fetchone()
        if row is None:
            raise TenantNotFoundError(tenant_id)
        return _row_to_tenant(row)
