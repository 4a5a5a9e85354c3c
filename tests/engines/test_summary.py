"""Tests for the printable order summary."""

from decimal import Decimal

import pytest

from procura_engines.summary import build_order_summary, format_amount
from procura_engines.totals import calculate_totals
from procura_kernel.domain.currency import Currency
from procura_kernel.logging_config import LogContext


class TestBuildOrderSummary:
    def test_ves_order_with_rate(self, taxed_item):
        summary = build_order_summary(
            calculate_totals([taxed_item]), "VES", exchange_rate=Decimal("40")
        )

        assert [(line.label, line.value) for line in summary.lines] == [
            ("Base Imponible", "VES 45.00"),
            ("Monto Descuento", "- VES 5.00"),
            ("Monto Venta", "+ VES 2.25"),
            ("Monto IVA", "+ VES 7.20"),
            ("TOTAL", "VES 54.45"),
            ("TOTAL (USD)", "USD 1.36"),
            ("Tasa de Cambio", "40.00"),
        ]
        assert summary.amount_in_words == "CINCUENTA Y CUATRO BOLIVARES CON 45/100"

    def test_usd_order_has_no_usd_equivalent(self, taxed_item):
        summary = build_order_summary(calculate_totals([taxed_item]), Currency.USD)

        labels = [line.label for line in summary.lines]
        assert "TOTAL (USD)" not in labels
        assert "Tasa de Cambio" not in labels
        assert summary.currency == Currency.USD

    def test_ves_order_without_rate(self, taxed_item):
        summary = build_order_summary(calculate_totals([taxed_item]), "VES", exchange_rate=0)

        assert summary.lines[-1].label == "TOTAL"

    def test_usd_order_with_rate_shows_rate_only(self, taxed_item):
        summary = build_order_summary(
            calculate_totals([taxed_item]), "USD", exchange_rate="36.5"
        )

        assert [(line.label, line.value) for line in summary.lines[4:]] == [
            ("TOTAL", "USD 54.45"),
            ("Tasa de Cambio", "36.50"),
        ]

    @pytest.mark.parametrize("rate", [Decimal("-40"), "-1", "tasa"])
    def test_unusable_rate_is_dropped(self, taxed_item, rate):
        summary = build_order_summary(calculate_totals([taxed_item]), "VES", exchange_rate=rate)

        labels = [line.label for line in summary.lines]
        assert "TOTAL (USD)" not in labels
        assert "Tasa de Cambio" not in labels

    def test_order_id_bound_to_log_context(self, taxed_item, log_capture):
        build_order_summary(calculate_totals([taxed_item]), "VES", order_id="OC-0042")

        record = log_capture.find("order_summary_built")[0]
        assert record["order_id"] == "OC-0042"
        assert record["has_exchange_rate"] is False
        assert LogContext.get_all() == {}

    def test_as_text(self):
        totals = calculate_totals([{"quantity": 1, "unit_price": 100, "is_exempt": True}])
        text = build_order_summary(totals, "USD").as_text()

        assert text.splitlines() == [
            "Base Imponible: USD 100.00",
            "Monto Descuento: - USD 0.00",
            "Monto Venta: + USD 0.00",
            "Monto IVA: + USD 0.00",
            "TOTAL: USD 100.00",
            "Monto en Letras: CIEN DOLARES CON 00/100",
        ]

    def test_empty_order(self):
        summary = build_order_summary(calculate_totals([]), "USD")

        assert summary.lines[4].value == "USD 0.00"
        assert summary.amount_in_words == "CERO DOLARES CON 00/100"


class TestFormatAmount:
    def test_two_places(self):
        assert format_amount(Currency.USD, Decimal("7.2")) == "USD 7.20"

    def test_sign_prefix(self):
        assert format_amount(Currency.VES, Decimal("5"), "-") == "- VES 5.00"

    def test_large_amount_prints_all_digits(self):
        assert format_amount(Currency.USD, Decimal("1e30")) == "USD " + "1" + "0" * 30 + ".00"
