"""Domain models for kost_balance — derived values only, nothing here is persisted."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.kost_common.errors import AppError


@dataclass(frozen=True)
class BalanceResult:
    tenant_id: str
    monthly_rent: Decimal
    total_payments: Decimal
    outstanding_balance: Decimal   # max(0, monthly_rent - total_payments)
    status: str                    # BalanceStatus value


@dataclass
class BatchBalanceResult:
    """Partial-success outcome of a batch calculation.

    A tenant id appears in exactly one of the two mappings.
    """

    results: dict[str, BalanceResult] = field(default_factory=dict)
    errors: dict[str, AppError] = field(default_factory=dict)
