"""Unit tests for BalanceApplicationService with a mocked engine."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.kost_balance.application.service import BalanceApplicationService
from src.kost_balance.domain.calculator import compute_balance
from src.kost_balance.domain.models import BatchBalanceResult
from src.kost_common.errors import NoRoomAssignmentError, TenantNotFoundError


def _batch(paid: dict[str, str], errors: tuple[str, ...] = ()) -> BatchBalanceResult:
    batch = BatchBalanceResult()
    for tenant_id, amount in paid.items():
        batch.results[tenant_id] = compute_balance(
            tenant_id, Decimal("1000000.00"), Decimal(amount)
        )
    for tenant_id in errors:
        batch.errors[tenant_id] = NoRoomAssignmentError(tenant_id)
    return batch


@pytest.fixture
def db():
    return MagicMock()


@pytest.fixture
def engine():
    return MagicMock()


@pytest.fixture
def tenant_repo():
    return MagicMock()


class TestGetBalance:
    async def test_formats_money_as_strings(self, db, engine, tenant_repo):
        engine.calculate_balance = AsyncMock(
            return_value=compute_balance("t-1", Decimal("1500000"), Decimal("500000"))
        )
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        resp = await svc.get_balance(db, "t-1")

        assert resp.outstanding_balance == "1000000.00"
        assert resp.outstanding_balance_display == "Rp1.000.000"
        assert resp.monthly_rent_display == "Rp1.500.000"
        assert resp.status == "unpaid"

    async def test_engine_errors_propagate(self, db, engine, tenant_repo):
        engine.calculate_balance = AsyncMock(side_effect=TenantNotFoundError("t-x"))
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        with pytest.raises(TenantNotFoundError):
            await svc.get_balance(db, "t-x")


class TestListBalances:
    async def test_keeps_tenant_order_and_skips_errors(self, db, engine, tenant_repo):
        tenant_repo.list_tenant_ids_with_room = AsyncMock(return_value=["t-3", "t-1", "t-2"])
        engine.calculate_balances = AsyncMock(
            return_value=_batch({"t-1": "0", "t-3": "1000000"}, errors=("t-2",))
        )
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        resp = await svc.list_balances(db, status=None, page=1, page_size=50)

        assert [item.tenant_id for item in resp.items] == ["t-3", "t-1"]
        assert resp.total == 2

    async def test_status_filter(self, db, engine, tenant_repo):
        tenant_repo.list_tenant_ids_with_room = AsyncMock(return_value=["t-1", "t-2"])
        engine.calculate_balances = AsyncMock(
            return_value=_batch({"t-1": "0", "t-2": "1000000"})
        )
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        resp = await svc.list_balances(db, status="unpaid", page=1, page_size=50)

        assert [item.tenant_id for item in resp.items] == ["t-1"]
        assert resp.total == 1

    async def test_pagination(self, db, engine, tenant_repo):
        ids = [f"t-{i}" for i in range(5)]
        tenant_repo.list_tenant_ids_with_room = AsyncMock(return_value=ids)
        engine.calculate_balances = AsyncMock(return_value=_batch({t: "0" for t in ids}))
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        resp = await svc.list_balances(db, status=None, page=2, page_size=2)

        assert [item.tenant_id for item in resp.items] == ["t-2", "t-3"]
        assert (resp.total, resp.page, resp.page_size) == (5, 2, 2)

    async def test_page_past_end_is_empty(self, db, engine, tenant_repo):
        tenant_repo.list_tenant_ids_with_room = AsyncMock(return_value=["t-1"])
        engine.calculate_balances = AsyncMock(return_value=_batch({"t-1": "0"}))
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        resp = await svc.list_balances(db, status=None, page=3, page_size=10)

        assert resp.items == []
        assert resp.total == 1

    async def test_moved_out_flag_reaches_repo(self, db, engine, tenant_repo):
        tenant_repo.list_tenant_ids_with_room = AsyncMock(return_value=[])
        engine.calculate_balances = AsyncMock(return_value=BatchBalanceResult())
        svc = BalanceApplicationService(engine=engine, tenant_repo=tenant_repo)

        await svc.list_balances(db, status=None, page=1, page_size=10, include_moved_out=True)

        tenant_repo.list_tenant_ids_with_room.assert_awaited_once_with(db, True)
