"""
Naive per-category spending forecast.

This is a heuristic, not a statistical model: the next month is the
trailing three-month average, nudged 10% up or down when the latest month
sits more than 10% away from that average. No confidence intervals, no
seasonality.
"""
from datetime import datetime

import numpy as np

from analytics import expenses_only, filter_by_month, group_by_category, shift_month
from formatting import round_half_up

TREND_BAND = 0.1


def classify_trend(latest, average):
    """increasing / decreasing / stable depending on where `latest` sits against `average`."""
    if latest > average * (1 + TREND_BAND):
        return 'increasing'
    if latest < average * (1 - TREND_BAND):
        return 'decreasing'
    return 'stable'


def predict_next(average, trend):
    if trend == 'increasing':
        return average * (1 + TREND_BAND)
    if trend == 'decreasing':
        return average * (1 - TREND_BAND)
    return average


def predict_future_expenses(transactions, now=None, months=3):
    """
    Spending pattern and next-month prediction for every category with
    expenses in the trailing `months` calendar months.

    A month without spend in a category counts as 0, so every average is
    over exactly `months` values. Categories come out in the order they are
    first seen, scanning the current month first.
    """
    if now is None:
        now = datetime.now()

    expenses = expenses_only(transactions)

    # Index 0 is the current month
    monthly = []
    for offset in range(months):
        month_expenses = filter_by_month(expenses, shift_month(now, -offset))
        monthly.append({c['category']: c['amount'] for c in group_by_category(month_expenses)})

    categories = []
    for totals in monthly:
        for category in totals:
            if category not in categories:
                categories.append(category)

    patterns = []
    for category in categories:
        amounts = [totals.get(category, 0) for totals in monthly]
        average = float(np.mean(amounts))
        latest = amounts[0]
        trend = classify_trend(latest, average)

        patterns.append({
            'category': category,
            'trend': trend,
            'average_spending': round(average, 2),
            'latest': round(latest, 2),
            'prediction': round_half_up(predict_next(average, trend)),
            'monthly_amounts': [round(a, 2) for a in reversed(amounts)]
        })

    return patterns
