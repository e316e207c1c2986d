"""Pydantic schemas and cursor utilities for kost_payment API.

Cursor format (sort key is payment_date DESC, created_at DESC, id DESC):
  {"d": "<payment_date>", "ts": "<created_at ISO>", "id": "<payment_id>"}
"""

import base64
import json
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from src.kost_common.money import money_to_display, money_to_str
from src.kost_payment.domain.models import Payment

# ---------------------------------------------------------------------------
# Cursor utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_payment: Payment) -> str:
    payload = {
        "d": last_payment.payment_date.isoformat(),
        "ts": last_payment.created_at.isoformat() if last_payment.created_at else None,
        "id": last_payment.id,
    }
    return base64.b64encode(json.dumps(payload).encode()).decode()


def cursor_decode(cursor: str | None) -> tuple[date, datetime, str] | None:
    """Decode a cursor string. Returns None on error (restart from the newest)."""
    if cursor is None:
        return None
    try:
        data = json.loads(base64.b64decode(cursor.encode()).decode())
        return (
            date.fromisoformat(data["d"]),
            datetime.fromisoformat(data["ts"]),
            str(UUID(data["id"])),
        )
    except Exception:
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RecordPaymentRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    payment_date: date
    notes: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PaymentItem(BaseModel):
    id: str
    tenant_id: str
    amount: str
    amount_display: str
    payment_date: str
    notes: str | None
    created_at: str

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentItem":
        return cls(
            id=payment.id,
            tenant_id=payment.tenant_id,
            amount=money_to_str(payment.amount),
            amount_display=money_to_display(payment.amount),
            payment_date=payment.payment_date.isoformat(),
            notes=payment.notes,
            created_at=payment.created_at.isoformat() if payment.created_at else "",
        )


class PaymentListResponse(BaseModel):
    items: list[PaymentItem]
    next_cursor: str | None
    has_more: bool
