"""
Exchange Engine - VES/USD conversion for order totals and quote comparison.

Pure functions with no I/O - exchange rates provided as parameters. Rates
are always expressed as bolívares per one US dollar.

Usage:
    from procura_engines.exchange import SupplierQuote, compare_quotes

    comparison = compare_quotes(
        quotes=[
            SupplierQuote(supplier_id="s1", unit_price=Decimal("10"), currency="USD"),
            SupplierQuote(supplier_id="s2", unit_price=Decimal("360"), currency="VES"),
        ],
        exchange_rate=Decimal("40"),
    )
    print(comparison.best_price)  # Decimal("9")
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from procura_engines.tracer import traced_engine
from procura_kernel.domain.currency import Currency
from procura_kernel.domain.values import ZERO, round_money, to_decimal
from procura_kernel.exceptions import InvalidExchangeRateError
from procura_kernel.logging_config import LogContext, get_logger

logger = get_logger("engines.exchange")

INCOMPLETE_QUOTE_ERROR = "Datos incompletos o inválidos."
MISSING_RATE_ERROR = "Falta Tasa de Cambio para VES a USD."


def _usable_rate(rate: Any) -> Decimal | None:
    value = to_decimal(rate, default=None)
    if value is None or value <= ZERO:
        return None
    return value


def convert_amount(
    amount: Decimal,
    from_currency: str | Currency,
    to_currency: str | Currency,
    exchange_rate: Decimal | float | str | None = None,
) -> Decimal:
    """
    Convert an amount between VES and USD.

    Same-currency conversion returns the amount unchanged. The result is
    not rounded; callers round for display.

    Raises:
        InvalidExchangeRateError: cross-currency conversion without a
            positive rate.
    """
    source = Currency.parse(from_currency)
    target = Currency.parse(to_currency)
    if source == target:
        return amount

    rate = _usable_rate(exchange_rate)
    if rate is None:
        logger.error("exchange_rate_invalid", extra={
            "from_currency": source.value,
            "to_currency": target.value,
            "exchange_rate": None if exchange_rate is None else str(exchange_rate),
        })
        raise InvalidExchangeRateError(source.value, target.value, exchange_rate)

    if source == Currency.VES:
        return amount / rate
    return amount * rate


def total_in_usd(
    total: Decimal,
    currency: str | Currency,
    exchange_rate: Decimal | float | str | None = None,
) -> Decimal | None:
    """
    USD equivalent of an order total, rounded to cents.

    USD totals are returned as-is. VES totals need a positive rate;
    without one the equivalent is unknown and None is returned.
    """
    currency = Currency.parse(currency)
    if currency == Currency.USD:
        return round_money(total)
    rate = _usable_rate(exchange_rate)
    if rate is None:
        return None
    return round_money(total / rate)


@dataclass(frozen=True)
class SupplierQuote:
    """A supplier's unit price for one material."""

    supplier_id: str | None
    unit_price: Decimal
    currency: Currency = Currency.USD
    exchange_rate: Decimal | None = None  # quote-specific rate, VES per USD
    quote_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        object.__setattr__(self, "currency", Currency.parse(self.currency))
        object.__setattr__(
            self, "exchange_rate", to_decimal(self.exchange_rate, default=None)
        )


@dataclass(frozen=True)
class QuoteResult:
    """
    A quote after conversion to the comparison currency.

    ``converted_price`` is None when the quote cannot be compared;
    ``error`` then says why.
    """

    quote: SupplierQuote
    converted_price: Decimal | None
    is_valid: bool
    error: str | None = None
    exchange_rate: Decimal | None = None  # rate actually applied


@dataclass(frozen=True)
class QuoteComparison:
    """Comparison of all quotes for one material."""

    base_currency: Currency
    results: tuple[QuoteResult, ...]
    best_price: Decimal | None

    @property
    def valid_results(self) -> tuple[QuoteResult, ...]:
        return tuple(r for r in self.results if r.is_valid)

    @property
    def best_results(self) -> tuple[QuoteResult, ...]:
        """Valid quotes matching the best price (ties included)."""
        if self.best_price is None:
            return ()
        return tuple(
            r for r in self.valid_results if r.converted_price == self.best_price
        )


def _reject(quote: SupplierQuote, error: str) -> QuoteResult:
    logger.debug("quote_rejected", extra={
        "supplier_id": quote.supplier_id,
        "currency": quote.currency.value,
        "reason": error,
    })
    return QuoteResult(quote, None, False, error)


def _evaluate_quote(
    quote: SupplierQuote,
    base_currency: Currency,
    global_rate: Decimal | None,
) -> QuoteResult:
    with LogContext.bind(quote_id=quote.quote_id):
        if not quote.supplier_id or quote.unit_price <= ZERO:
            return _reject(quote, INCOMPLETE_QUOTE_ERROR)

        if quote.currency == base_currency:
            return QuoteResult(quote, quote.unit_price, True, None, quote.exchange_rate)

        rate = _usable_rate(quote.exchange_rate) or global_rate
        if rate is None:
            return _reject(quote, MISSING_RATE_ERROR)

        converted = convert_amount(quote.unit_price, quote.currency, base_currency, rate)
        return QuoteResult(quote, converted, True, None, rate)


@traced_engine("exchange.compare_quotes", "1.0", fingerprint_fields=("quotes", "exchange_rate"))
def compare_quotes(
    quotes: Iterable[SupplierQuote],
    base_currency: str | Currency = Currency.USD,
    exchange_rate: Decimal | float | str | None = None,
) -> QuoteComparison:
    """
    Convert every quote to the base currency and pick the best price.

    Args:
        quotes: Supplier quotes for a single material
        base_currency: Currency prices are compared in (USD by default)
        exchange_rate: Global rate used for quotes without their own

    Returns:
        QuoteComparison; invalid quotes are kept with an error message
        and excluded from ``best_price``.
    """
    base = Currency.parse(base_currency)
    global_rate = _usable_rate(exchange_rate)

    results = tuple(_evaluate_quote(q, base, global_rate) for q in quotes)
    valid_prices = [r.converted_price for r in results if r.is_valid]
    best_price = min(valid_prices) if valid_prices else None

    logger.info("quote_comparison_completed", extra={
        "base_currency": base.value,
        "quote_count": len(results),
        "valid_count": len(valid_prices),
        "best_price": None if best_price is None else str(best_price),
    })
    return QuoteComparison(base_currency=base, results=results, best_price=best_price)
