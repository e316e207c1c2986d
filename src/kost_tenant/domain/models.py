"""Domain models for kost_tenant — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Tenant:
    id: str
    name: str
    contact_info: str | None
    room_id: str | None                     # last assignment is kept after move-out
    moved_out_at: datetime | None = None
    moved_out_rent: Decimal | None = None   # rent frozen at move-out
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.moved_out_at is None
