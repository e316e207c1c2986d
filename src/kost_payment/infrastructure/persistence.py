"""PaymentRepository — concrete implementation of PaymentRepositoryProtocol.

payments is append-only: this module has INSERT and SELECT statements only.
Sums are computed by PostgreSQL on NUMERIC(14,2) columns, so they are exact.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.kost_common.errors import InternalError
from src.kost_common.money import ZERO, to_money
from src.kost_payment.domain.models import Payment

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_INSERT_PAYMENT_SQL = text("""
    INSERT INTO payments (tenant_id, amount, payment_date, notes)
    VALUES (:tenant_id, :amount, :payment_date, :notes)
    RETURNING id, tenant_id, amount, payment_date, notes, created_at
""")

_LIST_PAYMENTS_SQL = text("""
    SELECT id, tenant_id, amount, payment_date, notes, created_at
    FROM payments
    WHERE tenant_id = :tenant_id
      AND (
          CAST(:cursor_date AS DATE) IS NULL
          OR (payment_date, created_at, id) < (
              CAST(:cursor_date AS DATE),
              CAST(:cursor_ts AS TIMESTAMPTZ),
              CAST(:cursor_id AS UUID)
          )
      )
    ORDER BY payment_date DESC, created_at DESC, id DESC
    LIMIT :limit
""")

_SUM_PAYMENTS_SQL = text("""
    SELECT COALESCE(SUM(amount), 0) AS total
    FROM payments
    WHERE tenant_id = :tenant_id
""")

_SUM_PAYMENTS_GROUPED_SQL = text("""
    SELECT tenant_id, SUM(amount) AS total
    FROM payments
    WHERE tenant_id = ANY(:tenant_ids)
    GROUP BY tenant_id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_payment(row: object) -> Payment:
    return Payment(
        id=str(row.id),  # type: ignore[attr-defined]
        tenant_id=str(row.tenant_id),  # type: ignore[attr-defined]
        amount=to_money(row.amount),  # type: ignore[attr-defined]
        payment_date=row.payment_date,  # type: ignore[attr-defined]
        notes=row.notes,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PaymentRepository:
    """Concrete repository for the payments table."""

    async def insert_payment(
        self,
        db: AsyncSession,
        tenant_id: str,
        amount: Decimal,
        payment_date: date,
        notes: str | None,
    ) -> Payment:
        result = await db.execute(
            _INSERT_PAYMENT_SQL,
            {
                "tenant_id": tenant_id,
                "amount": amount,
                "payment_date": payment_date,
                "notes": notes,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Payment insert returned no rows")
        return _row_to_payment(row)

    async def list_payments(
        self,
        db: AsyncSession,
        tenant_id: str,
        cursor: tuple[date, datetime, str] | None,
        limit: int,
    ) -> list[Payment]:
        cursor_date, cursor_ts, cursor_id = cursor if cursor else (None, None, None)
        result = await db.execute(
            _LIST_PAYMENTS_SQL,
            {
                "tenant_id": tenant_id,
                "cursor_date": cursor_date,
                "cursor_ts": cursor_ts,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        return [_row_to_payment(row) for row in result.fetchall()]

    async def sum_payments(self, db: AsyncSession, tenant_id: str) -> Decimal:
        result = await db.execute(_SUM_PAYMENTS_SQL, {"tenant_id": tenant_id})
        row = result.fetchone()
        return to_money(row.total) if row else ZERO

    async def sum_payments_by_tenants(
        self, db: AsyncSession, tenant_ids: list[str]
    ) -> dict[str, Decimal]:
        """One grouped query; tenants without payments are absent from the result."""
        if not tenant_ids:
            return {}
        result = await db.execute(_SUM_PAYMENTS_GROUPED_SQL, {"tenant_ids": tenant_ids})
        return {str(row.tenant_id): to_money(row.total) for row in result.fetchall()}
