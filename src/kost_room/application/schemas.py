"""Pydantic schemas and cursor utilities for kost_room API.

Cursor format (room_number is unique and the sort key):
  {"room_number": "<last room_number>"} encoded as Base64 JSON.
"""

import base64
import json
from decimal import Decimal

from pydantic import BaseModel, Field

from src.kost_common.enums import RoomStatus
from src.kost_common.money import money_to_display, money_to_str
from src.kost_room.domain.models import Room

# ---------------------------------------------------------------------------
# Cursor utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_room: Room) -> str:
    payload = json.dumps({"room_number": last_room.room_number})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> str | None:
    """Decode a cursor back to the last seen room_number. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return str(payload["room_number"])
    except Exception:
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateRoomRequest(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    room_type: str = Field(..., min_length=1, max_length=50)
    monthly_rent: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    status: RoomStatus = RoomStatus.AVAILABLE


class UpdateRoomRequest(BaseModel):
    room_type: str | None = Field(None, min_length=1, max_length=50)
    monthly_rent: Decimal | None = Field(None, gt=0, max_digits=14, decimal_places=2)
    status: RoomStatus | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomDetail(BaseModel):
    id: str
    room_number: str
    room_type: str
    monthly_rent: str
    monthly_rent_display: str
    status: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDetail":
        return cls(
            id=room.id,
            room_number=room.room_number,
            room_type=room.room_type,
            monthly_rent=money_to_str(room.monthly_rent),
            monthly_rent_display=money_to_display(room.monthly_rent),
            status=room.status,
            created_at=room.created_at.isoformat(),
            updated_at=room.updated_at.isoformat(),
        )


class RoomListResponse(BaseModel):
    items: list[RoomDetail]
    next_cursor: str | None
    has_more: bool
