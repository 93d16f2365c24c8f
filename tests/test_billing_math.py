"""
GST totals and paisa rounding.
"""

from decimal import Decimal

import pytest

from services.invoice_service import compute_invoice_totals
from utils.money import is_zero, round2


class TestComputeInvoiceTotals:

    def test_gst_on_one_thousand(self):
        totals = compute_invoice_totals([Decimal("1000")])

        assert totals.subtotal == Decimal("1000.00")
        assert totals.cgst == Decimal("90.00")
        assert totals.sgst == Decimal("90.00")
        assert totals.tax == Decimal("180.00")
        assert totals.total_amount == Decimal("1180.00")

    def test_march_scenario_amounts(self):
        totals = compute_invoice_totals([Decimal("1000"), Decimal("2000"), Decimal("1500")])

        assert totals.subtotal == Decimal("4500.00")
        assert totals.tax == Decimal("810.00")
        assert totals.total_amount == Decimal("5310.00")

    def test_half_paisa_rounds_up(self):
        # 100.50 * 0.09 = 9.045 -> 9.05 (banker's rounding would give 9.04)
        totals = compute_invoice_totals([Decimal("100.50")])

        assert totals.cgst == Decimal("9.05")
        assert totals.sgst == Decimal("9.05")
        assert totals.tax == Decimal("18.10")
        assert totals.total_amount == Decimal("118.60")

    def test_each_amount_rounded_before_summing(self):
        totals = compute_invoice_totals([Decimal("0.005"), Decimal("0.005")])

        assert totals.subtotal == Decimal("0.02")

    def test_float_amounts_do_not_leak_binary_error(self):
        totals = compute_invoice_totals([0.1, 0.2])

        assert totals.subtotal == Decimal("0.30")

    def test_total_is_subtotal_plus_tax(self):
        amounts = [Decimal("333.33"), Decimal("1234.56"), Decimal("0.07")]
        totals = compute_invoice_totals(amounts)

        assert totals.total_amount == totals.subtotal + totals.tax
        assert totals.tax == totals.cgst + totals.sgst

    def test_no_amounts(self):
        totals = compute_invoice_totals([])

        assert totals.total_amount == Decimal("0.00")


class TestMoneyHelpers:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1.005", Decimal("1.01")),
            ("1.004", Decimal("1.00")),
            ("-1.005", Decimal("-1.01")),
            (2, Decimal("2.00")),
        ],
    )
    def test_round2(self, value, expected):
        assert round2(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("0"), True),
            (Decimal("0.001"), True),
            (Decimal("-0.009"), True),
            (Decimal("0.01"), False),
            (0.30000000000000004 - 0.3, True),
        ],
    )
    def test_is_zero(self, value, expected):
        assert is_zero(value) is expected
