"""Unit tests for the pure balance formula."""

from decimal import Decimal

import pytest

from src.kost_balance.domain.calculator import compute_balance


@pytest.mark.parametrize(
    ("rent", "paid", "outstanding", "status"),
    [
        ("1500000", "0", "1500000.00", "unpaid"),
        ("1500000", "1000000", "500000.00", "unpaid"),
        ("1500000", "1500000", "0.00", "paid"),
        ("1500000", "2000000", "0.00", "paid"),      # overpayment is not a credit
        ("1250000.50", "1250000.49", "0.01", "unpaid"),
    ],
)
def test_formula(rent: str, paid: str, outstanding: str, status: str) -> None:
    result = compute_balance("t-1", Decimal(rent), Decimal(paid))
    assert result.outstanding_balance == Decimal(outstanding)
    assert result.status == status


def test_echoes_inputs_normalized() -> None:
    result = compute_balance("t-1", Decimal("1500000"), Decimal("0"))
    assert result.tenant_id == "t-1"
    assert str(result.monthly_rent) == "1500000.00"
    assert str(result.total_payments) == "0.00"


def test_outstanding_never_negative() -> None:
    result = compute_balance("t-1", Decimal("100"), Decimal("1000000"))
    assert result.outstanding_balance >= 0


def test_status_agrees_with_outstanding() -> None:
    for paid in ("0", "99.99", "100", "100.01"):
        result = compute_balance("t-1", Decimal("100"), Decimal(paid))
        assert (result.status == "paid") == (result.outstanding_balance == 0)


def test_result_is_immutable() -> None:
    result = compute_balance("t-1", Decimal("100"), Decimal("0"))
    with pytest.raises(AttributeError):
        result.status = "paid"  # type: ignore[misc]
