"""PaymentApplicationService — record and list rent payments.

Recording is the write that most often changes a balance, so it publishes
PaymentRecorded right after commit.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_balance.application.invalidation import BalanceInvalidator
from src.kost_balance.domain.events import PaymentRecorded
from src.kost_common.datetime_utils import utc_today
from src.kost_common.errors import InvalidPaymentDateError, TenantNotFoundError
from src.kost_payment.application.schemas import (
    PaymentItem,
    PaymentListResponse,
    cursor_decode,
    cursor_encode,
)
from src.kost_payment.domain.repository import PaymentRepositoryProtocol
from src.kost_payment.infrastructure.persistence import PaymentRepository
from src.kost_tenant.domain.repository import TenantRepositoryProtocol
from src.kost_tenant.infrastructure.persistence import TenantRepository

logger = logging.getLogger("kost.payment")


class PaymentApplicationService:
    def __init__(
        self,
        repo: PaymentRepositoryProtocol | None = None,
        tenant_repo: TenantRepositoryProtocol | None = None,
        invalidator: BalanceInvalidator | None = None,
    ) -> None:
        self._repo: PaymentRepositoryProtocol = repo or PaymentRepository()
        self._tenant_repo: TenantRepositoryProtocol = tenant_repo or TenantRepository()
        self._invalidator = invalidator or BalanceInvalidator()

    async def record_payment(
        self,
        db: AsyncSession,
        tenant_id: str,
        amount: Decimal,
        payment_date: date,
        notes: str | None = None,
    ) -> PaymentItem:
        if payment_date > utc_today():
            raise InvalidPaymentDateError(payment_date.isoformat())
        try:
            # Moved-out tenants may still settle arrears
            if await self._tenant_repo.get_tenant_by_id(db, tenant_id) is None:
                raise TenantNotFoundError(tenant_id)
            payment = await self._repo.insert_payment(db, tenant_id, amount, payment_date, notes)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "payment recorded id=%s tenant=%s amount=%s", payment.id, tenant_id, payment.amount
        )
        await self._invalidator.handle(
            PaymentRecorded(tenant_id=tenant_id, payment_id=payment.id, amount=payment.amount)
        )
        return PaymentItem.from_domain(payment)

    async def list_payments(
        self,
        db: AsyncSession,
        tenant_id: str,
        cursor: str | None,
        limit: int,
    ) -> PaymentListResponse:
        if await self._tenant_repo.get_tenant_by_id(db, tenant_id) is None:
            raise TenantNotFoundError(tenant_id)
        payments = await self._repo.list_payments(db, tenant_id, cursor_decode(cursor), limit + 1)
        has_more = len(payments) > limit
        page = payments[:limit]
        next_cursor = cursor_encode(page[-1]) if has_more and page else None
        return PaymentListResponse(
            items=[PaymentItem.from_domain(p) for p in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
