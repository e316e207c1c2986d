"""Unit tests for TenantApplicationService: assignment and move-out rules."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.kost_balance.domain.events import RoomAssignmentChanged, TenantMovedOut
from src.kost_common.errors import (
    RoomNotAvailableError,
    RoomNotFoundError,
    RoomOccupiedError,
    TenantMovedOutError,
    TenantNotFoundError,
)
from src.kost_room.domain.models import Room
from src.kost_tenant.application.service import TenantApplicationService
from src.kost_tenant.domain.models import Tenant

_NOW = datetime.now(UTC)


def _make_tenant(**kwargs) -> Tenant:
    defaults = dict(
        id="t-1", name="Siti", contact_info="0812", room_id=None,
        created_at=_NOW, updated_at=_NOW,
    )
    defaults.update(kwargs)
    return Tenant(**defaults)


def _make_room(room_id: str = "r-1", status: str = "available") -> Room:
    return Room(
        id=room_id, room_number="A1", room_type="standard",
        monthly_rent=Decimal("1500000.00"), status=status,
        created_at=_NOW, updated_at=_NOW,
    )


@pytest.fixture
def db():
    db = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def repo():
    return MagicMock()


@pytest.fixture
def room_repo():
    rr = MagicMock()
    rr.set_room_status = AsyncMock()
    return rr


@pytest.fixture
def invalidator():
    inv = MagicMock()
    inv.handle = AsyncMock()
    return inv


@pytest.fixture
def svc(repo, room_repo, invalidator):
    return TenantApplicationService(repo=repo, room_repo=room_repo, invalidator=invalidator)


class TestCreateAndGet:
    async def test_create(self, db, repo, svc):
        repo.create_tenant = AsyncMock(return_value=_make_tenant())

        detail = await svc.create_tenant(db, "Siti", "0812")

        assert detail.is_active is True
        assert detail.room_id is None
        db.commit.assert_awaited_once()

    async def test_get_missing(self, db, repo, svc):
        repo.get_tenant_by_id = AsyncMock(return_value=None)

        with pytest.raises(TenantNotFoundError):
            await svc.get_tenant(db, "t-x")

    async def test_list_paginates(self, db, repo, svc):
        tenants = [_make_tenant(id=f"00000000-0000-0000-0000-00000000000{i}") for i in range(3)]
        repo.list_tenants = AsyncMock(return_value=tenants)

        resp = await svc.list_tenants(db, include_moved_out=False, cursor=None, limit=2)

        assert resp.has_more is True
        assert len(resp.items) == 2
        assert resp.next_cursor is not None


class TestUpdateTenant:
    async def test_moved_out_tenant_is_read_only(self, db, repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(moved_out_at=_NOW))
        repo.update_tenant = AsyncMock()

        with pytest.raises(TenantMovedOutError):
            await svc.update_tenant(db, "t-1", "Siti A.", None)
        repo.update_tenant.assert_not_called()
        db.rollback.assert_awaited_once()


class TestAssignRoom:
    async def test_first_assignment(self, db, repo, room_repo, invalidator, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant())
        room_repo.get_room_for_update = AsyncMock(return_value=_make_room())
        repo.set_room = AsyncMock(return_value=_make_tenant(room_id="r-1"))

        detail = await svc.assign_room(db, "t-1", "r-1")

        assert detail.room_id == "r-1"
        room_repo.set_room_status.assert_awaited_once_with(db, "r-1", "occupied")
        event = invalidator.handle.call_args.args[0]
        assert event == RoomAssignmentChanged(tenant_id="t-1", old_room_id=None, new_room_id="r-1")

    async def test_reassignment_frees_old_room(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(room_id="r-1"))
        room_repo.get_room_for_update = AsyncMock(return_value=_make_room("r-2"))
        repo.set_room = AsyncMock(return_value=_make_tenant(room_id="r-2"))

        await svc.assign_room(db, "t-1", "r-2")

        calls = [c.args[1:] for c in room_repo.set_room_status.await_args_list]
        assert calls == [("r-1", "available"), ("r-2", "occupied")]

    async def test_same_room_is_noop(self, db, repo, room_repo, invalidator, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(room_id="r-1"))
        room_repo.get_room_for_update = AsyncMock(return_value=_make_room(status="occupied"))
        repo.set_room = AsyncMock()

        detail = await svc.assign_room(db, "t-1", "r-1")

        assert detail.room_id == "r-1"
        repo.set_room.assert_not_called()
        invalidator.handle.assert_not_called()

    async def test_occupied_room_rejected(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant())
        room_repo.get_room_for_update = AsyncMock(return_value=_make_room(status="occupied"))

        with pytest.raises(RoomOccupiedError):
            await svc.assign_room(db, "t-1", "r-1")
        db.rollback.assert_awaited_once()

    async def test_room_under_renovation_rejected(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant())
        room_repo.get_room_for_update = AsyncMock(
            return_value=_make_room(status="under_renovation")
        )

        with pytest.raises(RoomNotAvailableError):
            await svc.assign_room(db, "t-1", "r-1")

    async def test_unknown_room(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant())
        room_repo.get_room_for_update = AsyncMock(return_value=None)

        with pytest.raises(RoomNotFoundError):
            await svc.assign_room(db, "t-1", "r-x")

    async def test_moved_out_tenant_cannot_be_assigned(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(moved_out_at=_NOW))
        room_repo.get_room_for_update = AsyncMock()

        with pytest.raises(TenantMovedOutError):
            await svc.assign_room(db, "t-1", "r-1")
        room_repo.get_room_for_update.assert_not_called()


class TestMoveOut:
    async def test_freezes_rent_and_frees_room(self, db, repo, room_repo, invalidator, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(room_id="r-1"))
        room_repo.get_room_for_update = AsyncMock(return_value=_make_room(status="occupied"))
        repo.mark_moved_out = AsyncMock(return_value=_make_tenant(
            room_id="r-1", moved_out_at=_NOW, moved_out_rent=Decimal("1500000.00"),
        ))

        detail = await svc.move_out(db, "t-1")

        repo.mark_moved_out.assert_awaited_once_with(db, "t-1", Decimal("1500000.00"))
        room_repo.set_room_status.assert_awaited_once_with(db, "r-1", "available")
        assert detail.is_active is False
        assert detail.room_id == "r-1"
        assert detail.moved_out_rent == "1500000.00"
        assert invalidator.handle.call_args.args[0] == TenantMovedOut(tenant_id="t-1", room_id="r-1")

    async def test_tenant_without_room(self, db, repo, room_repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant())
        repo.mark_moved_out = AsyncMock(return_value=_make_tenant(moved_out_at=_NOW))
        room_repo.get_room_for_update = AsyncMock()

        await svc.move_out(db, "t-1")

        repo.mark_moved_out.assert_awaited_once_with(db, "t-1", None)
        room_repo.get_room_for_update.assert_not_called()

    async def test_twice_is_rejected(self, db, repo, svc):
        repo.get_tenant_for_update = AsyncMock(return_value=_make_tenant(moved_out_at=_NOW))

        with pytest.raises(TenantMovedOutError):
            await svc.move_out(db, "t-1")
