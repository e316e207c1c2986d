"""BalanceApplicationService — read-only composition over BalanceEngine.

No commit/rollback: nothing here writes. List views page over the batch
result in memory, which is fine for a single property (~1,000 tenants).
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_balance.application.schemas import BalanceListResponse, BalanceResponse
from src.kost_balance.domain.engine import BalanceEngine
from src.kost_balance.infrastructure.cache import get_balance_cache
from src.kost_payment.infrastructure.persistence import PaymentRepository
from src.kost_room.infrastructure.persistence import RoomRepository
from src.kost_tenant.domain.repository import TenantRepositoryProtocol
from src.kost_tenant.infrastructure.persistence import TenantRepository

logger = logging.getLogger("kost.balance")


def build_balance_engine() -> BalanceEngine:
    return BalanceEngine(
        tenants=TenantRepository(),
        rooms=RoomRepository(),
        payments=PaymentRepository(),
        cache=get_balance_cache(),
    )


class BalanceApplicationService:
    def __init__(
        self,
        engine: BalanceEngine | None = None,
        tenant_repo: TenantRepositoryProtocol | None = None,
    ) -> None:
        self._engine = engine or build_balance_engine()
        self._tenant_repo: TenantRepositoryProtocol = tenant_repo or TenantRepository()

    async def get_balance(self, db: AsyncSession, tenant_id: str) -> BalanceResponse:
        result = await self._engine.calculate_balance(db, tenant_id)
        return BalanceResponse.from_result(result)

    async def list_balances(
        self,
        db: AsyncSession,
        status: str | None,
        page: int,
        page_size: int,
        include_moved_out: bool = False,
    ) -> BalanceListResponse:
        tenant_ids = await self._tenant_repo.list_tenant_ids_with_room(db, include_moved_out)
        batch = await self._engine.calculate_balances(db, tenant_ids)
        if batch.errors:
            logger.warning(
                "balance list skipped %d of %d tenants", len(batch.errors), len(tenant_ids)
            )

        results = [batch.results[t] for t in tenant_ids if t in batch.results]
        if status is not None:
            results = [r for r in results if r.status == status]

        start = (page - 1) * page_size
        return BalanceListResponse(
            items=[BalanceResponse.from_result(r) for r in results[start:start + page_size]],
            total=len(results),
            page=page,
            page_size=page_size,
        )
