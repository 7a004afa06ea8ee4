"""Decimal money helpers shared by services, codec and shell."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import ValidationError

AmountLike = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
# Whole cents below 10**15, so balances stay exact in the default context.
MAX_AMOUNT = Decimal("1000000000000000")


def to_decimal(value: AmountLike) -> Decimal:
    """Coerce ``value`` to a finite Decimal in whole cents below MAX_AMOUNT.

    Floats go through ``str`` so 0.1 stays 0.1. Strings may use ``,`` as the
    decimal separator.
    """

    if isinstance(value, bool):
        raise ValidationError("Amount must be a number.", details={"value": value})
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = _parse(str(value))
    elif isinstance(value, str):
        result = _parse(value.strip().replace(",", "."))
    else:
        raise ValidationError("Amount must be a number.", details={"value": value})
    if not result.is_finite():
        raise ValidationError("Amount must be a finite number.", details={"value": value})
    if result.copy_abs() >= MAX_AMOUNT:
        raise ValidationError("Amount is too large.", details={"value": value})
    if result != result.quantize(CENT):
        raise ValidationError("Amount can have at most two decimal places.", details={"value": value})
    return result


def _parse(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValidationError(
            "Amount is not a valid number.", details={"value": text}, original_error=exc
        ) from exc


def require_positive(value: AmountLike, *, what: str = "Amount") -> Decimal:
    amount = to_decimal(value)
    if amount <= 0:
        raise ValidationError(f"{what} must be greater than zero.", details={"value": amount})
    return amount


def format_amount(value: Decimal) -> str:
    """Render an amount with two decimals, e.g. ``4000.00``."""

    return f"{value:.2f}"


def plain_amount(value: Decimal) -> str:
    """Render an amount as plain decimal text without exponent."""

    return format(value, "f")
