"""Domain events that make a tenant's balance stale.

Publishers (payment, tenant and room services) emit these after their
transaction commits. The only subscriber is the BalanceInvalidator, which
drops cached balances; readers then recompute from source.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PaymentRecorded:
    tenant_id: str
    payment_id: str
    amount: Decimal


@dataclass(frozen=True)
class RoomAssignmentChanged:
    tenant_id: str
    old_room_id: str | None
    new_room_id: str


@dataclass(frozen=True)
class TenantMovedOut:
    tenant_id: str
    room_id: str | None


@dataclass(frozen=True)
class RoomRentChanged:
    room_id: str
    tenant_id: str   # active tenant of the room
    old_rent: Decimal
    new_rent: Decimal


BalanceEvent = PaymentRecorded | RoomAssignmentChanged | TenantMovedOut | RoomRentChanged
