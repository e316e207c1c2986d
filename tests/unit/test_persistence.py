"""Unit tests for the raw-SQL repositories using a MagicMock AsyncSession."""

import uuid
from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.kost_common.errors import InternalError, TenantNotFoundError
from src.kost_payment.infrastructure.persistence import PaymentRepository
from src.kost_room.infrastructure.persistence import RoomRepository
from src.kost_tenant.infrastructure.persistence import TenantRepository

_ROOM_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
_TENANT_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")


def _room_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", _ROOM_ID)
    row.room_number = kwargs.get("room_number", "A1")
    row.room_type = "standard"
    row.monthly_rent = kwargs.get("monthly_rent", Decimal("1500000.00"))
    row.status = kwargs.get("status", "available")
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _tenant_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", _TENANT_ID)
    row.name = "Siti"
    row.contact_info = None
    row.room_id = kwargs.get("room_id", _ROOM_ID)
    row.moved_out_at = kwargs.get("moved_out_at")
    row.moved_out_rent = kwargs.get("moved_out_rent")
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _payment_row(**kwargs):
    row = MagicMock()
    row.id = uuid.uuid4()
    row.tenant_id = kwargs.get("tenant_id", _TENANT_ID)
    row.amount = kwargs.get("amount", Decimal("500000.00"))
    row.payment_date = date(2026, 10, 1)
    row.notes = None
    row.created_at = datetime.now(UTC)
    return row


def _session(fetchone=None, fetchall=None) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.fetchall.return_value = fetchall or []
    db = MagicMock()
    db.execute = AsyncMock(return_value=result)
    return db


def _params(db: MagicMock) -> dict:
    return db.execute.call_args.args[1]


class TestRoomRepository:
    async def test_maps_row(self):
        db = _session(fetchone=_room_row())

        room = await RoomRepository().get_room_by_id(db, str(_ROOM_ID))

        assert room is not None
        assert room.id == str(_ROOM_ID)
        assert room.monthly_rent == Decimal("1500000.00")

    async def test_missing_returns_none(self):
        assert await RoomRepository().get_room_by_id(_session(), "x") is None

    async def test_lock_query_uses_for_update(self):
        db = _session(fetchone=_room_row())

        await RoomRepository().get_room_for_update(db, str(_ROOM_ID))

        assert "FOR UPDATE" in str(db.execute.call_args.args[0])

    async def test_rooms_by_ids_keyed_by_id(self):
        db = _session(fetchall=[_room_row()])

        rooms = await RoomRepository().get_rooms_by_ids(db, [str(_ROOM_ID)])

        assert list(rooms) == [str(_ROOM_ID)]

    async def test_rooms_by_ids_empty_skips_query(self):
        db = _session()
        assert await RoomRepository().get_rooms_by_ids(db, []) == {}
        db.execute.assert_not_called()

    async def test_list_passes_filters(self):
        db = _session(fetchall=[])

        await RoomRepository().list_rooms(db, "available", "A1", 21)

        assert _params(db) == {"status": "available", "cursor_room_number": "A1", "limit": 21}

    async def test_set_status_on_missing_room(self):
        with pytest.raises(InternalError):
            await RoomRepository().set_room_status(_session(), "x", "available")

    async def test_count_references(self):
        row = MagicMock()
        row.n = 2
        assert await RoomRepository().count_tenant_references(_session(fetchone=row), "x") == 2


class TestTenantRepository:
    async def test_maps_active_tenant(self):
        db = _session(fetchone=_tenant_row())

        tenant = await TenantRepository().get_tenant_by_id(db, str(_TENANT_ID))

        assert tenant is not None
        assert tenant.room_id == str(_ROOM_ID)
        assert tenant.is_active is True
        assert tenant.moved_out_rent is None

    async def test_maps_moved_out_tenant(self):
        db = _session(fetchone=_tenant_row(
            moved_out_at=datetime.now(UTC), moved_out_rent=Decimal("1200000.00"),
        ))

        tenant = await TenantRepository().get_tenant_by_id(db, str(_TENANT_ID))

        assert tenant is not None
        assert tenant.is_active is False
        assert tenant.moved_out_rent == Decimal("1200000.00")

    async def test_unassigned_room_is_none(self):
        db = _session(fetchone=_tenant_row(room_id=None))

        tenant = await TenantRepository().get_tenant_by_id(db, str(_TENANT_ID))

        assert tenant is not None
        assert tenant.room_id is None

    async def test_ids_with_room(self):
        db = _session(fetchall=[_tenant_row()])

        ids = await TenantRepository().list_tenant_ids_with_room(db, include_moved_out=False)

        assert ids == [str(_TENANT_ID)]
        assert _params(db) == {"include_moved_out": False}

    async def test_set_room_on_moved_out_tenant(self):
        with pytest.raises(TenantNotFoundError):
            await TenantRepository().set_room(_session(), str(_TENANT_ID), str(_ROOM_ID))

    async def test_mark_moved_out_passes_frozen_rent(self):
        db = _session(fetchone=_tenant_row(
            moved_out_at=datetime.now(UTC), moved_out_rent=Decimal("1500000.00"),
        ))

        await TenantRepository().mark_moved_out(db, str(_TENANT_ID), Decimal("1500000.00"))

        assert _params(db)["moved_out_rent"] == Decimal("1500000.00")


class TestPaymentRepository:
    async def test_insert_maps_row(self):
        db = _session(fetchone=_payment_row())

        payment = await PaymentRepository().insert_payment(
            db, str(_TENANT_ID), Decimal("500000.00"), date(2026, 10, 1), None
        )

        assert payment.tenant_id == str(_TENANT_ID)
        assert payment.amount == Decimal("500000.00")

    async def test_sum_is_exact_decimal(self):
        row = MagicMock()
        row.total = Decimal("1000000.30")

        total = await PaymentRepository().sum_payments(_session(fetchone=row), str(_TENANT_ID))

        assert total == Decimal("1000000.30")

    async def test_sum_without_payments(self):
        row = MagicMock()
        row.total = 0

        total = await PaymentRepository().sum_payments(_session(fetchone=row), str(_TENANT_ID))

        assert str(total) == "0.00"

    async def test_grouped_sums(self):
        row = MagicMock()
        row.tenant_id = _TENANT_ID
        row.total = Decimal("750000.00")
        db = _session(fetchall=[row])

        sums = await PaymentRepository().sum_payments_by_tenants(db, [str(_TENANT_ID), "other"])

        assert sums == {str(_TENANT_ID): Decimal("750000.00")}

    async def test_list_without_cursor_passes_nulls(self):
        db = _session(fetchall=[])

        await PaymentRepository().list_payments(db, str(_TENANT_ID), None, 21)

        params = _params(db)
        assert params["cursor_date"] is None
        assert params["cursor_id"] is None
        assert params["limit"] == 21
