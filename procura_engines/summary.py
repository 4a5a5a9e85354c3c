"""
Order summary - label/value rows printed under a purchase order's items.

The same rows feed the on-screen preview and the PDF summary block, so
both show identical text:

    Base Imponible: VES 45.00
    Monto Descuento: - VES 5.00
    Monto Venta: + VES 2.25
    Monto IVA: + VES 7.20
    TOTAL: VES 54.45
    TOTAL (USD): USD 1.36
    Tasa de Cambio: 40.00
    Monto en Letras: CINCUENTA Y CUATRO BOLIVARES CON 45/100
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from procura_engines.amount_words import number_to_words
from procura_engines.exchange import total_in_usd
from procura_engines.totals import TotalsResult
from procura_kernel.domain.currency import Currency, CurrencyRegistry
from procura_kernel.domain.values import ZERO, round_money, to_decimal
from procura_kernel.logging_config import LogContext, get_logger

logger = get_logger("engines.summary")


@dataclass(frozen=True)
class SummaryLine:
    label: str
    value: str


@dataclass(frozen=True)
class OrderSummary:
    """Rows of the totals block plus the amount in words."""

    currency: Currency
    lines: tuple[SummaryLine, ...]
    amount_in_words: str

    def as_text(self) -> str:
        rows = [f"{line.label}: {line.value}" for line in self.lines]
        rows.append(f"Monto en Letras: {self.amount_in_words}")
        return "\n".join(rows)


def format_amount(currency: Currency, amount: Decimal, sign: str = "") -> str:
    """``VES 45.00`` / ``- VES 5.00``, at the currency's precision."""
    places = CurrencyRegistry.get_info(currency).decimal_places
    prefix = f"{sign} " if sign else ""
    return f"{prefix}{currency.value} {round_money(amount, places):f}"


def build_order_summary(
    totals: TotalsResult,
    currency: str | Currency,
    exchange_rate: Decimal | float | str | None = None,
    order_id: str | None = None,
) -> OrderSummary:
    """
    Build the printable summary for a calculated order.

    ``TOTAL (USD)`` appears only for VES orders with a positive rate;
    ``Tasa de Cambio`` whenever a positive rate is given, whatever the
    order currency. Zero, negative or unparsable rates are dropped.

    Args:
        order_id: Bound into the log context while the summary is built
    """
    with LogContext.bind(order_id=order_id):
        currency = Currency.parse(currency)
        rate = to_decimal(exchange_rate, default=None)
        if rate is not None and rate <= ZERO:
            rate = None

        lines = [
            SummaryLine("Base Imponible", format_amount(currency, totals.base_imponible)),
            SummaryLine("Monto Descuento", format_amount(currency, totals.monto_descuento, "-")),
            SummaryLine("Monto Venta", format_amount(currency, totals.monto_venta, "+")),
            SummaryLine("Monto IVA", format_amount(currency, totals.monto_iva, "+")),
            SummaryLine("TOTAL", format_amount(currency, totals.total)),
        ]

        if currency == Currency.VES and rate is not None:
            usd = total_in_usd(totals.total, currency, rate)
            lines.append(SummaryLine("TOTAL (USD)", format_amount(Currency.USD, usd)))
        if rate is not None:
            lines.append(SummaryLine("Tasa de Cambio", f"{round_money(rate):f}"))

        summary = OrderSummary(
            currency=currency,
            lines=tuple(lines),
            amount_in_words=number_to_words(totals.total, currency),
        )
        logger.info("order_summary_built", extra={
            "currency": currency.value,
            "total": str(totals.total),
            "has_exchange_rate": rate is not None,
        })
        return summary
