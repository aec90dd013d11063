"""
Number formatting helpers shared by the analytics modules.
"""
import math

import config


def round_half_up(value):
    """Round to the nearest integer, .5 going up (matches JavaScript Math.round)."""
    return int(math.floor(value + 0.5))


def percent_of(part, whole):
    """Percentage of `part` in `whole`, 0 when `whole` is zero."""
    if not whole:
        return 0.0
    return part / whole * 100


def percent_change(current, previous):
    """Relative change from `previous` to `current` in percent, 0 when `previous` is zero."""
    if not previous:
        return 0.0
    return (current - previous) / previous * 100


def _group_indian(digits):
    """Group a digit string as 12,34,567 (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ','.join(pairs + [tail])


def format_currency(amount, symbol=None):
    """
    Format an amount as whole currency units with Indian digit grouping.

    Examples:
        5000 -> "₹5,000"
        123456.6 -> "₹1,23,457"
        -500 -> "-₹500"
    """
    if symbol is None:
        symbol = config.CURRENCY_SYMBOL

    whole = round_half_up(abs(amount))
    sign = '-' if amount < 0 and whole else ''
    return f"{sign}{symbol}{_group_indian(str(whole))}"
