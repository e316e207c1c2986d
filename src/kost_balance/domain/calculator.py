"""The balance formula, kept free of I/O.

    outstanding_balance = max(0, monthly_rent - total_payments)
    status              = paid  iff total_payments >= monthly_rent

Exact Decimal arithmetic; overpayment reads as 0 outstanding and paid.
"""

from decimal import Decimal

from src.kost_balance.domain.models import BalanceResult
from src.kost_common.enums import BalanceStatus
from src.kost_common.money import ZERO, to_money


def compute_balance(
    tenant_id: str, monthly_rent: Decimal, total_payments: Decimal
) -> BalanceResult:
    rent = to_money(monthly_rent)
    paid = to_money(total_payments)
    status = BalanceStatus.PAID if paid >= rent else BalanceStatus.UNPAID
    return BalanceResult(
        tenant_id=tenant_id,
        monthly_rent=rent,
        total_payments=paid,
        outstanding_balance=max(ZERO, rent - paid),
        status=status.value,
    )
