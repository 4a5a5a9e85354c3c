"""
Typed Exception Hierarchy for the Procura core.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (PDF functions, form handlers, import jobs) must react to errors by
type, not by parsing message text. Every exception here:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

Example - WRONG way to handle errors:
    try:
        words = number_to_words(total, order.currency)
    except Exception as e:
        if "negative" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way:
    try:
        words = number_to_words(total, order.currency)
    except NegativeAmountError as e:
        api_response(code=e.code, amount=e.amount)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    ProcuraError (base)
    |
    +-- AmountError
    |   +-- InvalidAmountError
    |   +-- NegativeAmountError
    |   +-- AmountOutOfRangeError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |
    +-- ExchangeRateError
    |   +-- InvalidExchangeRateError
    |
    +-- ValidationError
    |   +-- OrderDraftInvalidError
    |
    +-- ConfigError
        +-- InvalidConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Amount          | INVALID_AMOUNT              | NaN, infinite or unparsable amount
                | NEGATIVE_AMOUNT             | Amount below zero where not allowed
                | AMOUNT_OUT_OF_RANGE         | Amount too large to render in words
----------------|-----------------------------|-----------------------------------------
Currency        | INVALID_CURRENCY            | Code is not USD or VES
----------------|-----------------------------|-----------------------------------------
Exchange Rate   | INVALID_EXCHANGE_RATE       | Rate missing, zero or negative
----------------|-----------------------------|-----------------------------------------
Validation      | ORDER_DRAFT_INVALID         | Draft order fails pre-submit checks
----------------|-----------------------------|-----------------------------------------
Config          | INVALID_CONFIG              | Configuration file fails validation

===============================================================================
DESIGN DECISIONS
===============================================================================

1. Inherit from Exception (not ValueError): domain errors are catchable as a
   group and never confused with programming errors.
2. ``code`` is a class attribute: static per type, readable without an
   instance.
3. The totals engine never raises; these errors come from the words
   converter, the exchange engine, validation and configuration.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


class ProcuraError(Exception):
    """
    Base exception for all procura errors.

    All subclasses must have a `code` class attribute.
    """

    code: str = "PROCURA_ERROR"


# Amount-related exceptions


class AmountError(ProcuraError):
    """Base exception for monetary amount errors."""

    code: str = "AMOUNT_ERROR"


class InvalidAmountError(AmountError):
    """Amount is NaN, infinite, or cannot be parsed as a number."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: Any):
        self.amount = str(amount)
        super().__init__(f"Invalid amount: {amount!r}")


class NegativeAmountError(AmountError):
    """Amount is negative where only non-negative values are accepted."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, amount: Decimal):
        self.amount = str(amount)
        super().__init__(f"Amount must not be negative: {amount}")


class AmountOutOfRangeError(AmountError):
    """Amount exceeds the largest value the converter can spell out."""

    code: str = "AMOUNT_OUT_OF_RANGE"

    def __init__(self, amount: Decimal, limit: Decimal):
        self.amount = str(amount)
        self.limit = str(limit)
        super().__init__(f"Amount {amount} exceeds supported limit {limit}")


# Currency-related exceptions


class CurrencyError(ProcuraError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Currency code is not one of the supported currencies."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: Any):
        self.currency = str(currency)
        super().__init__(f"Unsupported currency: {currency!r}")


# Exchange rate exceptions


class ExchangeRateError(ProcuraError):
    """Base exception for exchange rate errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class InvalidExchangeRateError(ExchangeRateError):
    """
    Exchange rate is missing, zero or negative.

    Raised on any cross-currency conversion without a usable rate.
    """

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, from_currency: str, to_currency: str, rate: Any):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.rate = None if rate is None else str(rate)
        super().__init__(
            f"Invalid exchange rate {rate!r} for {from_currency} -> {to_currency}"
        )


# Validation exceptions


class ValidationError(ProcuraError):
    """Base exception for caller-side input validation."""

    code: str = "VALIDATION_ERROR"


class OrderDraftInvalidError(ValidationError):
    """Draft purchase order fails the pre-submit checks."""

    code: str = "ORDER_DRAFT_INVALID"

    def __init__(self, issues: tuple):
        self.issues = issues
        super().__init__(
            f"Order draft has {len(issues)} issue(s): "
            + "; ".join(issue.message for issue in issues)
        )


# Configuration exceptions


class ConfigError(ProcuraError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidConfigError(ConfigError):
    """Configuration file parsed but failed validation."""

    code: str = "INVALID_CONFIG"

    def __init__(self, source: str, errors: list[str]):
        self.source = source
        self.errors = errors
        super().__init__(
            f"Invalid configuration in {source}: " + "; ".join(errors)
        )
