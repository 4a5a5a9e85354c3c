"""Currency -- supported order currencies and their Spanish nouns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from procura_kernel.exceptions import InvalidCurrencyError


class Currency(str, Enum):
    """Currencies an order or quote can be denominated in."""

    USD = "USD"
    VES = "VES"

    @classmethod
    def parse(cls, value: Any) -> Currency:
        """Accept a Currency or a case-insensitive code string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidCurrencyError(value)


@dataclass(frozen=True)
class CurrencyInfo:
    """Information about a single supported currency."""

    code: str
    decimal_places: int
    name: str
    singular_noun: str  # "UN DOLAR"
    plural_noun: str  # "DOS DOLARES"


class CurrencyRegistry:
    """Registry of supported currencies."""

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = {
        "USD": CurrencyInfo("USD", 2, "US Dollar", "DOLAR", "DOLARES"),
        "VES": CurrencyInfo("VES", 2, "Bolivar Soberano", "BOLIVAR", "BOLIVARES"),
    }

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Check whether a code is a supported currency."""
        return code in cls._CURRENCIES

    @classmethod
    def get_info(cls, code: str | Currency) -> CurrencyInfo:
        """Get currency info; raises InvalidCurrencyError for unknown codes."""
        return cls._CURRENCIES[Currency.parse(code).value]

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        return frozenset(cls._CURRENCIES)
