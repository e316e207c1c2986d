"""Domain models for kost_room — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Room:
    id: str
    room_number: str
    room_type: str
    monthly_rent: Decimal   # 2 fractional digits, > 0
    status: str             # RoomStatus value
    created_at: datetime
    updated_at: datetime
