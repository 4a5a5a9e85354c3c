"""
Values -- Decimal coercion and money rounding.

Responsibility:
    Converts loosely-typed numbers coming from form state and fetched rows
    (int, float, str, Decimal, None) into Decimal, and rounds monetary
    results to two places.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Rounding policy:
    ROUND_HALF_UP on Decimal (half away from zero), applied to the decimal
    string form of the input. Floats are converted through ``str()`` so
    ``1.005`` rounds to ``1.01``; this differs from binary-float
    ``toFixed``-style rounding on those edge cases and is pinned by tests.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from procura_kernel.exceptions import InvalidAmountError

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: Any, default: Decimal | None = ZERO) -> Decimal | None:
    """
    Lenient Decimal coercion.

    None, NaN, infinities, booleans and unparsable strings collapse to
    ``default`` instead of propagating.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    if not result.is_finite():
        return default
    return result


def parse_amount(value: Any) -> Decimal:
    """
    Strict Decimal coercion for amounts that must be meaningful.

    Raises:
        InvalidAmountError: value is None, a boolean, NaN, infinite, or
            not a number.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(value)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(value) from e
    if not result.is_finite():
        raise InvalidAmountError(value)
    return result


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """
    Round to ``places`` decimal places, half away from zero.

    Precision is widened to the operand's magnitude, so amounts with more
    than 28 significant digits still quantize instead of signalling
    InvalidOperation.
    """
    quantum = CENT if places == 2 else Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)
