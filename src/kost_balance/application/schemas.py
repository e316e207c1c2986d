"""Pydantic schemas for kost_balance API responses.

Money is serialized as decimal strings ("1500000.00") plus a Rupiah display
string; never as JSON numbers.
"""

from pydantic import BaseModel

from src.kost_balance.domain.models import BalanceResult
from src.kost_common.money import money_to_display, money_to_str


class BalanceResponse(BaseModel):
    tenant_id: str
    monthly_rent: str
    monthly_rent_display: str
    total_payments: str
    total_payments_display: str
    outstanding_balance: str
    outstanding_balance_display: str
    status: str

    @classmethod
    def from_result(cls, result: BalanceResult) -> "BalanceResponse":
        return cls(
            tenant_id=result.tenant_id,
            monthly_rent=money_to_str(result.monthly_rent),
            monthly_rent_display=money_to_display(result.monthly_rent),
            total_payments=money_to_str(result.total_payments),
            total_payments_display=money_to_display(result.total_payments),
            outstanding_balance=money_to_str(result.outstanding_balance),
            outstanding_balance_display=money_to_display(result.outstanding_balance),
            status=result.status,
        )


class BalanceListResponse(BaseModel):
    items: list[BalanceResponse]
    total: int
    page: int
    page_size: int
