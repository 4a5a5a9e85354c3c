"""
Pytest fixtures for the procura test suite.

Provides:
- Clean logging state between tests
- A JSON log capture fixture
- Common line-item builders
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from procura_config import clear_config_cache
from procura_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_state():
    """Reset logging, log context and config cache between tests."""
    reset_logging()
    LogContext.clear()
    clear_config_cache()
    yield
    LogContext.clear()
    reset_logging()
    clear_config_cache()


class LogCapture:
    """JSON log lines written by the procura logger hierarchy."""

    def __init__(self, stream: StringIO):
        self._stream = stream

    @property
    def records(self) -> list[dict]:
        lines = self._stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]

    def find(self, message: str) -> list[dict]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def log_capture() -> LogCapture:
    """Configure procura logging at DEBUG into an in-memory stream."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    return LogCapture(stream)


@pytest.fixture
def taxed_item():
    """The reference line: 10 x 5.00, 10% discount, 5% markup, 16% IVA."""
    return {
        "quantity": 10,
        "unit_price": Decimal("5"),
        "tax_rate": Decimal("0.16"),
        "is_exempt": False,
        "discount_percentage": 10,
        "sales_percentage": 5,
    }
