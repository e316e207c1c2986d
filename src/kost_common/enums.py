"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    UNDER_RENOVATION = "under_renovation"


class BalanceStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
