"""Rounding rules for money amounts."""

from decimal import Decimal

import pytest
from storefront.shared.money import as_decimal, round_cents, to_cents, to_minor_units


class TestRounding:
    @pytest.mark.parametrize(
        "amount, expected",
        [(9.998, 10.0), (0.125, 0.13), (0.124, 0.12), (2.675, 2.68), (100, 100.0)],
    )
    def test_half_up_to_the_cent(self, amount, expected):
        assert to_cents(amount) == expected

    def test_no_binary_noise(self):
        assert as_decimal(0.1) + as_decimal(0.2) == Decimal("0.3")

    def test_none_is_zero(self):
        assert round_cents(None) == Decimal("0.00")


class TestMinorUnits:
    def test_cents(self):
        assert to_minor_units(49.99) == 4999

    def test_rounds_before_converting(self):
        assert to_minor_units(10.005) == 1001
