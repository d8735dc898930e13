"""
Khata Primitives — Amounts
============================
Money and quantities are Decimal in memory and plain JSON numbers
on the wire. Floats never take part in arithmetic.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Union

ZERO = Decimal("0")
CENT = Decimal("0.01")

JsonNumber = Union[int, float]

# Largest digit count a double carries exactly; wire amounts are floats.
MAX_SIGNIFICANT_DIGITS = 15


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a wire value into a Decimal.

    None and "" read as zero. Floats go through str() so that 110.1
    becomes Decimal("110.1") and not its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid amount.")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"'{value}' is not a valid amount.") from exc
    if not result.is_finite():
        raise ValueError(f"'{value}' is not a finite amount.")
    return result


def to_json_number(value: Decimal) -> JsonNumber:
    """Integral amounts serialize as int, everything else as float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def weighted_average_cost(
    stock: Decimal,
    cost_price: Decimal,
    quantity: Decimal,
    unit_price: Decimal,
) -> Decimal:
    """
    New unit cost after receiving `quantity` at `unit_price`:

        ((stock × cost_price) + (quantity × unit_price)) / (stock + quantity)

    rounded to two decimals. With no stock left the incoming price wins.
    """
    total_stock = stock + quantity
    if total_stock <= 0:
        return unit_price
    current_value = stock * cost_price
    incoming_value = quantity * unit_price
    return quantize_money((current_value + incoming_value) / total_stock)


def floor_at_zero(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def check_precision(value: Decimal, name: str) -> Decimal:
    """Reject amounts a JSON number cannot carry without rounding."""
    if value == value.to_integral_value():
        return value
    digits = len(value.normalize().as_tuple().digits)
    if digits > MAX_SIGNIFICANT_DIGITS:
        raise ValueError(
            f"{name} has {digits} significant digits; "
            f"at most {MAX_SIGNIFICANT_DIGITS} are kept."
        )
    return value


def coerce_amounts(instance: Any, *names: str) -> None:
    """
    Convert the named attributes of a frozen dataclass to Decimal
    in place. Meant for __post_init__.
    """
    for name in names:
        value = check_precision(to_decimal(getattr(instance, name)), name)
        object.__setattr__(instance, name, value)
