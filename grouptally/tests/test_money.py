"""
Tests for money helpers.
"""
import pytest
from decimal import Decimal

from grouptally.core.money import round_money, split_evenly, to_decimal


def test_round_half_up():
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("-2.675")) == Decimal("-2.68")
    assert round_money(Decimal("1.004")) == Decimal("1.00")
    assert str(round_money(30)) == "30.00"


def test_float_input_uses_decimal_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert round_money(0.1 + 0.2) == Decimal("0.30")


def test_split_evenly_hands_out_remainder_first():
    assert split_evenly(Decimal("100"), 3) == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
    assert split_evenly(Decimal("10"), 6) == [
        Decimal("1.66"), Decimal("1.66"), Decimal("1.67"),
        Decimal("1.67"), Decimal("1.67"), Decimal("1.67"),
    ]


def test_split_evenly_sums_to_amount():
    for parts in range(1, 12):
        assert sum(split_evenly(Decimal("123.45"), parts)) == Decimal("123.45")


def test_split_evenly_needs_parts():
    with pytest.raises(ValueError):
        split_evenly(Decimal("10"), 0)
