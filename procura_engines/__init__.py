"""
Module: procura_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the import surface for the PDF functions,
    the order screens and any other caller.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import procura_kernel (and sibling engine modules).
    MUST NOT import procura_config; configured values are passed in.

Invariants enforced:
    - Decimal-only arithmetic; floats from callers are converted through
      their string form.
    - Determinism: identical inputs always produce identical outputs.
    - The totals engine is total over its input domain and never raises.

Usage:
    from procura_engines import calculate_totals, number_to_words

    totals = calculate_totals(order_items)
    words = number_to_words(totals.total, order.currency)
"""

from procura_engines.amount_words import (
    convert_group,
    integer_to_words,
    number_to_words,
)
from procura_engines.exchange import (
    QuoteComparison,
    QuoteResult,
    SupplierQuote,
    compare_quotes,
    convert_amount,
    total_in_usd,
)
from procura_engines.summary import (
    OrderSummary,
    SummaryLine,
    build_order_summary,
    format_amount,
)
from procura_engines.totals import (
    DEFAULT_TAX_RATE,
    LineBreakdown,
    LineItem,
    TotalsCalculator,
    TotalsResult,
    calculate_totals,
)
from procura_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Totals
    "DEFAULT_TAX_RATE",
    "LineBreakdown",
    "LineItem",
    "TotalsCalculator",
    "TotalsResult",
    "calculate_totals",
    # Amount in words
    "convert_group",
    "integer_to_words",
    "number_to_words",
    # Exchange
    "QuoteComparison",
    "QuoteResult",
    "SupplierQuote",
    "compare_quotes",
    "convert_amount",
    "total_in_usd",
    # Summary
    "OrderSummary",
    "SummaryLine",
    "build_order_summary",
    "format_amount",
    # Tracing
    "compute_input_fingerprint",
    "traced_engine",
]
