"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_payment.domain.models import Payment


class PaymentRepositoryProtocol(Protocol):
    async def insert_payment(
        self,
        db: AsyncSession,
        tenant_id: str,
        amount: Decimal,
        payment_date: date,
        notes: str | None,
    ) -> Payment: ...

    async def list_payments(
        self,
        db: AsyncSession,
        tenant_id: str,
        cursor: tuple[date, datetime, str] | None,
        limit: int,
    ) -> list[Payment]: ...

    async def sum_payments(self, db: AsyncSession, tenant_id: str) -> Decimal: ...

    async def sum_payments_by_tenants(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Decimal]: ...
