"""Domain models for kost_payment — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Payment:
    """Immutable once recorded: there is no update or delete path."""

    id: str
    tenant_id: str
    amount: Decimal          # > 0, 2 fractional digits
    payment_date: date       # <= today (UTC) at recording time
    notes: str | None = None
    created_at: datetime | None = None
