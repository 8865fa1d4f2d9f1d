# weighbill/services/billing_math.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

Q2 = Decimal("0.01")
Q3 = Decimal("0.001")
GRAMS_PER_KG = Decimal("1000")

ZERO = Decimal("0")


def D(x: Any) -> Decimal:
    """
    NaN-safe Decimal. Missing, malformed, NaN or infinite input becomes 0.
    """
    if isinstance(x, bool):
        return ZERO
    try:
        d = Decimal(str(x if x is not None else 0).strip() or "0")
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not d.is_finite():
        return ZERO
    return d


def non_negative(x: Any) -> Decimal:
    d = D(x)
    return d if d > 0 else ZERO


def money2(x: Any) -> Decimal:
    return D(x).quantize(Q2, rounding=ROUND_HALF_UP)


def weight3(x: Any) -> Decimal:
    return D(x).quantize(Q3, rounding=ROUND_HALF_UP)


def net_weight(gross_kg, gross_gm, less_kg, less_gm) -> Decimal:
    gross = non_negative(gross_kg) + non_negative(gross_gm) / GRAMS_PER_KG
    less = non_negative(less_kg) + non_negative(less_gm) / GRAMS_PER_KG
    return max(ZERO, gross - less)


def line_amount(net_wt, rate) -> Decimal:
    return money2(non_negative(net_wt) * non_negative(rate))


def display_quantity(net_wt, unit) -> Decimal:
    """Kgs -> kilograms, Gms -> grams; 2 decimals."""
    value = non_negative(net_wt)
    if str(getattr(unit, "value", unit)) == "Gms":
        value = value * GRAMS_PER_KG
    return money2(value)


def kg_to_grams(kg) -> int:
    return int((D(kg) * GRAMS_PER_KG).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def grams_to_kg(grams) -> Decimal:
    return D(grams) / GRAMS_PER_KG
