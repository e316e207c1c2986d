"""Fixed-point money utilities.

All rents, payments and balances are Decimal with exactly 2 fractional digits.
No float anywhere: sums and comparisons must be exact.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Decimal | int | str) -> Decimal:
    """Normalize an input amount to a 2-digit Decimal.

    Floats are rejected because their binary value is already inexact.
    """
    if isinstance(value, float):
        raise TypeError("Money must not be built from float")
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid money amount: {value!r}") from exc


def money_to_str(amount: Decimal) -> str:
    """Wire format: 1500000 -> '1500000.00'."""
    return str(amount.quantize(CENT))


def money_to_display(amount: Decimal) -> str:
    """Rupiah display string: 1500000 -> 'Rp1.500.000', 1250.5 -> 'Rp1.250,50'."""
    q = amount.quantize(CENT)
    sign = "-" if q < 0 else ""
    q = abs(q)
    whole = int(q)
    fraction = int((q - whole) * 100)
    grouped = f"{whole:,}".replace(",", ".")
    if fraction:
        return f"{sign}Rp{grouped},{fraction:02d}"
    return f"{sign}Rp{grouped}"
