"""
Tests for the Exchange Engine.

Covers:
- VES/USD amount conversion
- USD equivalent of order totals
- Quote comparison: conversion, validity, best price
"""

from decimal import Decimal

import pytest

from procura_engines.exchange import (
    INCOMPLETE_QUOTE_ERROR,
    MISSING_RATE_ERROR,
    SupplierQuote,
    compare_quotes,
    convert_amount,
    total_in_usd,
)
from procura_kernel.domain.currency import Currency
from procura_kernel.exceptions import InvalidExchangeRateError


class TestConvertAmount:
    def test_same_currency_unchanged(self):
        assert convert_amount(Decimal("12.34"), "USD", "USD") == Decimal("12.34")

    def test_ves_to_usd_divides(self):
        assert convert_amount(Decimal("400"), "VES", "USD", Decimal("40")) == Decimal("10")

    def test_usd_to_ves_multiplies(self):
        assert convert_amount(Decimal("10"), Currency.USD, Currency.VES, "36.5") == Decimal("365.0")

    @pytest.mark.parametrize("rate", [None, 0, -3, "abc"])
    def test_missing_rate_raises(self, rate):
        with pytest.raises(InvalidExchangeRateError) as exc_info:
            convert_amount(Decimal("100"), "VES", "USD", rate)
        assert exc_info.value.code == "INVALID_EXCHANGE_RATE"
        assert exc_info.value.from_currency == "VES"

    def test_missing_rate_is_logged(self, log_capture):
        with pytest.raises(InvalidExchangeRateError):
            convert_amount(Decimal("100"), "VES", "USD", None)

        errors = log_capture.find("exchange_rate_invalid")
        assert errors[0]["level"] == "ERROR"
        assert errors[0]["to_currency"] == "USD"


class TestTotalInUsd:
    def test_ves_total_with_rate(self):
        assert total_in_usd(Decimal("54.45"), "VES", Decimal("40")) == Decimal("1.36")

    def test_ves_total_without_rate(self):
        assert total_in_usd(Decimal("54.45"), "VES", None) is None
        assert total_in_usd(Decimal("54.45"), "VES", 0) is None

    def test_usd_total_returned(self):
        assert total_in_usd(Decimal("216"), "USD") == Decimal("216.00")


class TestCompareQuotes:
    def test_best_price_in_usd(self):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(supplier_id="s1", unit_price=Decimal("10"), currency="USD"),
                SupplierQuote(supplier_id="s2", unit_price=Decimal("360"), currency="VES"),
            ],
            exchange_rate=Decimal("40"),
        )

        assert comparison.base_currency == Currency.USD
        assert comparison.best_price == Decimal("9")
        assert [r.quote.supplier_id for r in comparison.best_results] == ["s2"]
        assert comparison.results[1].exchange_rate == Decimal("40")

    def test_quote_rate_overrides_global_rate(self):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(
                    supplier_id="s1",
                    unit_price=Decimal("500"),
                    currency="VES",
                    exchange_rate=Decimal("50"),
                ),
            ],
            exchange_rate=Decimal("40"),
        )

        result = comparison.results[0]
        assert result.converted_price == Decimal("10")
        assert result.exchange_rate == Decimal("50")

    def test_ves_quote_without_any_rate_is_invalid(self):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(supplier_id="s1", unit_price=Decimal("500"), currency="VES"),
                SupplierQuote(supplier_id="s2", unit_price=Decimal("12"), currency="USD"),
            ],
        )

        invalid = comparison.results[0]
        assert invalid.is_valid is False
        assert invalid.converted_price is None
        assert invalid.error == MISSING_RATE_ERROR
        assert comparison.best_price == Decimal("12")

    @pytest.mark.parametrize(
        "supplier_id, price",
        [(None, Decimal("10")), ("", Decimal("10")), ("s1", Decimal("0")), ("s1", Decimal("-1"))],
    )
    def test_incomplete_quotes_are_invalid(self, supplier_id, price):
        comparison = compare_quotes(
            quotes=[SupplierQuote(supplier_id=supplier_id, unit_price=price)],
        )

        assert comparison.results[0].error == INCOMPLETE_QUOTE_ERROR
        assert comparison.best_price is None
        assert comparison.valid_results == ()
        assert comparison.best_results == ()

    def test_ties_all_reported(self):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(supplier_id="a", unit_price=Decimal("8")),
                SupplierQuote(supplier_id="b", unit_price=Decimal("320"), currency=Currency.VES),
                SupplierQuote(supplier_id="c", unit_price=Decimal("9")),
            ],
            exchange_rate="40",
        )

        assert comparison.best_price == Decimal("8")
        assert {r.quote.supplier_id for r in comparison.best_results} == {"a", "b"}

    def test_ves_base_currency(self):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(supplier_id="a", unit_price=Decimal("10"), currency="USD"),
                SupplierQuote(supplier_id="b", unit_price=Decimal("380"), currency="VES"),
            ],
            base_currency="VES",
            exchange_rate=Decimal("40"),
        )

        assert comparison.results[0].converted_price == Decimal("400")
        assert comparison.best_price == Decimal("380")

    def test_no_quotes(self):
        comparison = compare_quotes(quotes=[])

        assert comparison.results == ()
        assert comparison.best_price is None

    def test_comparison_is_traced(self, log_capture):
        compare_quotes(
            quotes=[SupplierQuote(supplier_id="a", unit_price=Decimal("1"))],
            exchange_rate=Decimal("40"),
        )

        traces = log_capture.find("PROCURA_ENGINE_TRACE")
        assert traces[0]["engine_name"] == "exchange.compare_quotes"
        completed = log_capture.find("quote_comparison_completed")
        assert completed[0]["valid_count"] == 1

    def test_rejected_quote_logged_with_quote_id(self, log_capture):
        comparison = compare_quotes(
            quotes=[
                SupplierQuote(supplier_id="s1", unit_price=Decimal("360"), currency="VES",
                              quote_id="COT-7"),
                SupplierQuote(supplier_id="s2", unit_price=Decimal("10"), quote_id="COT-8"),
            ],
        )

        assert comparison.results[0].error == MISSING_RATE_ERROR
        rejected = log_capture.find("quote_rejected")
        assert len(rejected) == 1
        assert rejected[0]["quote_id"] == "COT-7"
        assert rejected[0]["reason"] == MISSING_RATE_ERROR
        assert "quote_id" not in log_capture.find("quote_comparison_completed")[0]
