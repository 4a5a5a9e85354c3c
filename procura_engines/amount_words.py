"""
Amount-in-Words - Spanish "Monto en Letras" for purchase orders.

Renders a non-negative amount as the legal text printed under the totals
block, e.g. ``CIEN DOLARES CON 00/100``. The amount is rounded exactly as
the totals engine rounds, so a TOTAL and its words always describe the
same value.

Numbers ending in 1 within a tens group keep the table form ``VEINTE Y UN``
(not ``VEINTIUNO``); documents already issued use that wording.

Usage:
    from procura_engines.amount_words import number_to_words

    number_to_words(Decimal("2021.05"), "VES")
    # 'DOS MIL VEINTE Y UN BOLIVARES CON 05/100'
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from procura_kernel.domain.currency import Currency, CurrencyRegistry
from procura_kernel.domain.values import ZERO, parse_amount, round_money
from procura_kernel.exceptions import AmountOutOfRangeError, NegativeAmountError
from procura_kernel.logging_config import get_logger

logger = get_logger("engines.amount_words")

UNITS = ("", "UN", "DOS", "TRES", "CUATRO", "CINCO", "SEIS", "SIETE", "OCHO", "NUEVE")
TENS = (
    "", "DIEZ", "VEINTE", "TREINTA", "CUARENTA",
    "CINCUENTA", "SESENTA", "SETENTA", "OCHENTA", "NOVENTA",
)
HUNDREDS = (
    "", "CIENTO", "DOSCIENTOS", "TRESCIENTOS", "CUATROCIENTOS",
    "QUINIENTOS", "SEISCIENTOS", "SETECIENTOS", "OCHOCIENTOS", "NOVECIENTOS",
)
TEENS = (
    "DIEZ", "ONCE", "DOCE", "TRECE", "CATORCE",
    "QUINCE", "DIECISEIS", "DIECISIETE", "DIECIOCHO", "DIECINUEVE",
)

MAX_AMOUNT = Decimal("999999999999.99")
_LIMIT = Decimal(10**12)


def _reject_out_of_range(value: Decimal) -> None:
    logger.error("amount_words_out_of_range", extra={
        "amount": str(value),
        "limit": str(MAX_AMOUNT),
    })
    raise AmountOutOfRangeError(value, MAX_AMOUNT)


def convert_group(num: int) -> str:
    """Words for an integer 0-999; empty string for 0."""
    hundreds, rest = divmod(num, 100)
    tens, units = divmod(rest, 10)
    parts: list[str] = []

    if num == 100:
        return "CIEN"
    if hundreds:
        parts.append(HUNDREDS[hundreds])

    if tens == 1:
        parts.append(TEENS[units])
    elif tens > 1:
        parts.append(TENS[tens] + (f" Y {UNITS[units]}" if units else ""))
    elif units:
        parts.append(UNITS[units])

    return " ".join(parts)


def _below_million(num: int) -> str:
    thousands, rest = divmod(num, 1000)
    parts: list[str] = []
    if thousands == 1:
        parts.append("MIL")
    elif thousands > 1:
        parts.append(f"{convert_group(thousands)} MIL")
    if rest:
        parts.append(convert_group(rest))
    return " ".join(parts)


def integer_to_words(entero: int) -> str:
    """
    Words for the integer part of an amount, without the currency noun.

    ``MIL`` (never ``UN MIL``) for a single thousand; ``UN MILLON`` /
    ``<n> MILLONES`` above a million.
    """
    millions, rest = divmod(entero, 1_000_000)
    parts: list[str] = []
    if millions == 1:
        parts.append("UN MILLON")
    elif millions > 1:
        parts.append(f"{_below_million(millions)} MILLONES")
    if rest:
        parts.append(_below_million(rest))
    return " ".join(parts)


def number_to_words(amount: Any, currency: str | Currency) -> str:
    """
    Convert an amount to Spanish words with a two-digit cents fraction.

    Args:
        amount: Non-negative amount (Decimal, int, float or numeric string)
        currency: "VES" or "USD"

    Returns:
        e.g. ``UN BOLIVAR CON 00/100``, ``MIL DOLARES CON 00/100``

    Raises:
        InvalidAmountError: amount is NaN, infinite or not a number
        NegativeAmountError: amount is below zero
        AmountOutOfRangeError: amount is 10^12 or more
        InvalidCurrencyError: currency is not VES or USD
    """
    info = CurrencyRegistry.get_info(currency)
    parsed = parse_amount(amount)
    if parsed >= _LIMIT:
        _reject_out_of_range(parsed)

    value = round_money(parsed, info.decimal_places)
    if value < ZERO:
        logger.error("amount_words_negative_amount", extra={
            "amount": str(value),
            "currency": info.code,
        })
        raise NegativeAmountError(value)
    # 999999999999.995 rounds up past the limit
    if value > MAX_AMOUNT:
        _reject_out_of_range(value)

    entero = int(value)
    decimal = int((value - entero) * 100)

    if entero == 0:
        texto = f"CERO {info.plural_noun}"
    elif entero == 1:
        texto = f"UN {info.singular_noun}"
    else:
        words = integer_to_words(entero)
        if entero % 1_000_000 == 0:
            words += " DE"
        texto = f"{words} {info.plural_noun}"

    return f"{texto} CON {decimal:02d}/100".strip()
