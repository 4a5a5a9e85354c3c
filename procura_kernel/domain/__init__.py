"""
Pure domain layer.

No dependencies on databases, clocks, or I/O. All domain objects are
immutable and deterministic.
"""

from procura_kernel.domain.currency import Currency, CurrencyInfo, CurrencyRegistry
from procura_kernel.domain.validation import (
    DraftIssue,
    check_order_draft,
    require_valid_order_draft,
    validate_rif,
)
from procura_kernel.domain.values import parse_amount, round_money, to_decimal

__all__ = [
    "Currency",
    "CurrencyInfo",
    "CurrencyRegistry",
    "DraftIssue",
    "check_order_draft",
    "parse_amount",
    "require_valid_order_draft",
    "round_money",
    "to_decimal",
    "validate_rif",
]
