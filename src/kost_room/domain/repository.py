"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_room.domain.models import Room


class RoomRepositoryProtocol(Protocol):
    async def get_room_by_id(self, db: AsyncSession, room_id: str) -> Room | None: ...

    async def get_room_for_update(self, db: AsyncSession, room_id: str) -> Room | None: ...

    async def get_room_by_number(self, db: AsyncSession, room_number: str) -> Room | None: ...

    async def get_rooms_by_ids(
        self, db: AsyncSession, room_ids: list[str]
    ) -> dict[str, Room]: ...

    async def list_rooms(
        self,
        db: AsyncSession,
        status: str | None,
        cursor_room_number: str | None,
        limit: int,
    ) -> list[Room]: ...

    async def create_room(
        self,
        db: AsyncSession,
        room_number: str,
        room_type: str,
        monthly_rent: Decimal,
        status: str,
    ) -> Room: ...

    async def update_room(
        self,
        db: AsyncSession,
        room_id: str,
        room_type: str | None,
        monthly_rent: Decimal | None,
        status: str | None,
    ) -> Room | None: ...

    async def set_room_status(self, db: AsyncSession, room_id: str, status: str) -> None: ...

    async def delete_room(self, db: AsyncSession, room_id: str) -> bool: ...

    async def count_tenant_references(self, db: AsyncSession, room_id: str) -> int: ...

    async def get_active_tenant_id(self, db: AsyncSession, room_id: str) -> str | None: ...
