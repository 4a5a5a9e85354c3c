"""
Totals Engine - Tax, discount and markup arithmetic for quote and order lines.

Pure functions with no I/O. Produces the figures every summary block and
purchase-order PDF prints: Base Imponible, Monto Descuento, Monto Venta,
Monto IVA and TOTAL.

Per-line rule (order matters):
    item_value   = quantity * unit_price
    discount     = item_value * discount_percentage / 100
    subtotal     = item_value - discount            (taxable / markup base)
    sales        = subtotal * sales_percentage / 100 (markup, never taxed)
    iva          = 0 if exempt else subtotal * tax_rate
    item_total   = subtotal + sales + iva

Lines are summed in full precision; each aggregate is rounded once to two
places (ROUND_HALF_UP). TOTAL is the sum of the rounded base, sales and IVA
so the printed summary always adds up.

Usage:
    from procura_engines.totals import calculate_totals

    result = calculate_totals([
        {"quantity": 10, "unit_price": 5, "discount_percentage": 10,
         "sales_percentage": 5},
    ])
    print(result.total)  # Decimal("54.45")
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import MAX_PREC, Decimal, localcontext
from typing import Any

from procura_engines.tracer import traced_engine
from procura_kernel.domain.values import HUNDRED, ZERO, round_money, to_decimal
from procura_kernel.logging_config import get_logger

logger = get_logger("engines.totals")

DEFAULT_TAX_RATE = Decimal("0.16")

_LINE_FIELDS = (
    "quantity",
    "unit_price",
    "tax_rate",
    "is_exempt",
    "discount_percentage",
    "sales_percentage",
)


@dataclass(frozen=True)
class LineItem:
    """
    One row of a quote or purchase order.

    Values are normalized on construction: missing, NaN or unparsable
    numbers become 0, except ``tax_rate`` which becomes None so the
    calculator's default rate applies.
    """

    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO
    tax_rate: Decimal | None = None  # As decimal (e.g., 0.16 for 16%)
    is_exempt: bool = False
    discount_percentage: Decimal = ZERO  # 0-100
    sales_percentage: Decimal = ZERO  # markup, 0-100

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity))
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))
        object.__setattr__(self, "tax_rate", to_decimal(self.tax_rate, default=None))
        object.__setattr__(self, "is_exempt", bool(self.is_exempt))
        object.__setattr__(
            self, "discount_percentage", to_decimal(self.discount_percentage)
        )
        object.__setattr__(self, "sales_percentage", to_decimal(self.sales_percentage))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LineItem:
        """Build from a form row or fetched record; unrelated keys are ignored."""
        return cls(**{name: data.get(name) for name in _LINE_FIELDS if name in data})

    @classmethod
    def coerce(cls, item: Any) -> LineItem:
        """Accept a LineItem, a mapping, or any object exposing the line attributes."""
        if isinstance(item, cls):
            return item
        if isinstance(item, Mapping):
            return cls.from_mapping(item)
        return cls(
            **{
                name: getattr(item, name)
                for name in _LINE_FIELDS
                if hasattr(item, name)
            }
        )


@dataclass(frozen=True)
class LineBreakdown:
    """
    Calculated amounts for a single line, unrounded.

    Immutable value object; ``tax_rate_applied`` is 0 for exempt lines.
    """

    item_value: Decimal
    discount_amount: Decimal
    subtotal_after_discount: Decimal
    sales_amount: Decimal
    iva_amount: Decimal
    tax_rate_applied: Decimal

    @property
    def item_total(self) -> Decimal:
        return self.subtotal_after_discount + self.sales_amount + self.iva_amount


@dataclass(frozen=True)
class TotalsResult:
    """
    Monetary breakdown for a full set of lines.

    All five totals are rounded to two places; ``lines`` keeps the
    per-line figures in full precision, in input order.
    """

    base_imponible: Decimal
    monto_descuento: Decimal
    monto_venta: Decimal
    monto_iva: Decimal
    total: Decimal
    lines: tuple[LineBreakdown, ...] = ()

    @property
    def item_count(self) -> int:
        return len(self.lines)

    def as_dict(self) -> dict[str, Decimal]:
        """Totals keyed by the names used in order payloads and PDF functions."""
        return {
            "baseImponible": self.base_imponible,
            "montoDescuento": self.monto_descuento,
            "montoVenta": self.monto_venta,
            "montoIVA": self.monto_iva,
            "total": self.total,
        }

    @classmethod
    def empty(cls) -> TotalsResult:
        zero = round_money(ZERO)
        return cls(
            base_imponible=zero,
            monto_descuento=zero,
            monto_venta=zero,
            monto_iva=zero,
            total=zero,
        )


class TotalsCalculator:
    """
    Calculate order totals.

    Pure functions - no I/O. Never raises over well-formed (possibly
    incomplete) input: degenerate lines contribute zero.
    """

    def __init__(self, default_tax_rate: Decimal | float | str | None = None):
        self.default_tax_rate = to_decimal(default_tax_rate, default=DEFAULT_TAX_RATE)

    def calculate_line(self, item: LineItem | Mapping[str, Any]) -> LineBreakdown:
        """Apply the per-line rule to one item."""
        item = LineItem.coerce(item)

        item_value = item.quantity * item.unit_price
        discount_amount = item_value * (item.discount_percentage / HUNDRED)
        subtotal = item_value - discount_amount
        sales_amount = subtotal * (item.sales_percentage / HUNDRED)

        if item.is_exempt:
            rate = ZERO
        else:
            rate = self.default_tax_rate if item.tax_rate is None else item.tax_rate
        iva_amount = subtotal * rate

        return LineBreakdown(
            item_value=item_value,
            discount_amount=discount_amount,
            subtotal_after_discount=subtotal,
            sales_amount=sales_amount,
            iva_amount=iva_amount,
            tax_rate_applied=rate,
        )

    @traced_engine("totals", "1.0", fingerprint_fields=("items",))
    def calculate(self, items: Iterable[LineItem | Mapping[str, Any]]) -> TotalsResult:
        """
        Calculate the totals breakdown for a sequence of lines.

        Args:
            items: LineItem instances or mappings with the same keys

        Returns:
            TotalsResult with rounded totals and per-line breakdowns
        """
        t0 = time.monotonic()
        lines = tuple(self.calculate_line(item) for item in items)

        if not lines:
            logger.debug("totals_calculation_empty", extra={})
            return TotalsResult.empty()

        base = sum((ln.subtotal_after_discount for ln in lines), ZERO)
        discount = sum((ln.discount_amount for ln in lines), ZERO)
        sales = sum((ln.sales_amount for ln in lines), ZERO)
        iva = sum((ln.iva_amount for ln in lines), ZERO)

        base_imponible = round_money(base)
        monto_venta = round_money(sales)
        monto_iva = round_money(iva)
        with localcontext() as ctx:
            # exact sum of the rounded components
            ctx.prec = MAX_PREC
            total = base_imponible + monto_venta + monto_iva

        result = TotalsResult(
            base_imponible=base_imponible,
            monto_descuento=round_money(discount),
            monto_venta=monto_venta,
            monto_iva=monto_iva,
            total=total,
            lines=lines,
        )

        logger.info("totals_calculation_completed", extra={
            "item_count": len(lines),
            "untaxed_count": sum(1 for ln in lines if ln.tax_rate_applied == ZERO),
            "base_imponible": str(result.base_imponible),
            "monto_iva": str(result.monto_iva),
            "total": str(result.total),
            "duration_ms": round((time.monotonic() - t0) * 1000, 2),
        })
        return result


def calculate_totals(
    items: Iterable[LineItem | Mapping[str, Any]],
    default_tax_rate: Decimal | float | str | None = None,
) -> TotalsResult:
    """
    Convenience wrapper around ``TotalsCalculator.calculate``.

    Args:
        items: Lines of the quote or order
        default_tax_rate: Rate for lines without one (0.16 when omitted)
    """
    return TotalsCalculator(default_tax_rate).calculate(items=items)
