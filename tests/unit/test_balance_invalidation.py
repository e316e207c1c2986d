"""Unit tests for BalanceInvalidator: every event retires its tenant's cached balance."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.kost_balance.application.invalidation import BalanceInvalidator
from src.kost_balance.domain.events import (
    PaymentRecorded,
    RoomAssignmentChanged,
    RoomRentChanged,
    TenantMovedOut,
)


@pytest.fixture
def cache():
    fake = MagicMock()
    fake.invalidate = AsyncMock()
    return fake


@pytest.mark.parametrize(
    "event",
    [
        PaymentRecorded(tenant_id="t-1", payment_id="p-1", amount=Decimal("100.00")),
        RoomAssignmentChanged(tenant_id="t-1", old_room_id=None, new_room_id="r-2"),
        TenantMovedOut(tenant_id="t-1", room_id="r-1"),
        RoomRentChanged(
            room_id="r-1", tenant_id="t-1",
            old_rent=Decimal("1500000.00"), new_rent=Decimal("1750000.00"),
        ),
    ],
)
async def test_event_invalidates_tenant(cache, event) -> None:
    await BalanceInvalidator(cache=cache).handle(event)
    cache.invalidate.assert_awaited_once_with("t-1")
