"""
Procura configuration schema.

Frozen dataclasses the YAML loader parses into. Runtime callers receive a
``ProcuraConfig`` from ``procura_config.get_active_config()`` and pass the
values they need (default tax rate, comparison currency) into the engines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from procura_kernel.domain.currency import Currency


@dataclass(frozen=True)
class CurrencySettings:
    """Display settings for one currency."""

    code: Currency
    symbol: str
    label: str


@dataclass(frozen=True)
class ProcuraConfig:
    """Validated configuration for the calculation core and its callers."""

    default_tax_rate: Decimal
    comparison_base_currency: Currency
    log_level: str = "INFO"
    currencies: dict[str, CurrencySettings] = field(default_factory=dict)
    source: str = "<memory>"
    checksum: str = ""

    def currency_settings(self, code: str | Currency) -> CurrencySettings | None:
        return self.currencies.get(Currency.parse(code).value)
