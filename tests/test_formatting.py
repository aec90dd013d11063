import pytest

from categories import CATEGORY_COLORS, category_color
from formatting import format_currency, percent_change, percent_of, round_half_up


@pytest.mark.parametrize('amount, expected', [
    (0, '₹0'),
    (999, '₹999'),
    (5000, '₹5,000'),
    (123456.6, '₹1,23,457'),
    (1234567, '₹12,34,567'),
    (-500, '-₹500'),
])
def test_format_currency_uses_indian_grouping(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_custom_symbol():
    assert format_currency(1500, symbol='$') == '$1,500'


def test_format_currency_tiny_negative_is_not_signed():
    assert format_currency(-0.2) == '₹0'


def test_round_half_up_matches_math_round():
    assert round_half_up(2.5) == 3
    assert round_half_up(84.5) == 85
    assert round_half_up(1283.33) == 1283
    assert round_half_up(-0.4) == 0


def test_percent_helpers_guard_zero_denominators():
    assert percent_of(10, 0) == 0.0
    assert percent_change(500, 0) == 0.0
    assert percent_of(25, 200) == pytest.approx(12.5)
    assert percent_change(6000, 5000) == pytest.approx(20.0)


def test_unknown_category_gets_other_color():
    assert category_color('Food & Dining') == '#FF6384'
    assert category_color('Pets') == CATEGORY_COLORS['Other']
