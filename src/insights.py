"""
Rule-based spending insights.

The rules are fixed thresholds, evaluated in order:

1. Budget exceeded (spent > limit)
2. Budget approaching its limit (spent > 80% of limit)
3. Month-over-month expense change beyond +/-20%
4. Top spending category of the current month

Insight ids are derived from the rule and the budget id or category, so
the same input always yields the same list.
"""
import hashlib
import re
import unicodedata
from datetime import datetime

from analytics import EXPENSE, expenses_only, filter_by_month, group_by_category, shift_month, total_by_kind
from budget import month_utilization
from formatting import format_currency, percent_change, round_half_up

APPROACHING_LIMIT_RATIO = 0.8
MONTHLY_CHANGE_THRESHOLD = 20


def _digest(text):
    return hashlib.sha1(text.encode('utf-8')).hexdigest()[:8]


def _slug(text):
    """Lowercase a category label and collapse punctuation, symbols and spaces into dashes.

    Letters, digits and combining marks of any script are kept. A label with
    none of those falls back to a digest of the raw text.
    """
    chars = ['-' if unicodedata.category(c)[0] in 'PSZC' else c for c in text.lower()]
    slug = re.sub(r'-+', '-', ''.join(chars)).strip('-')
    return slug or _digest(text)


def _insight(insight_id, kind, title, description, impact, category=None):
    return {
        'id': insight_id,
        'type': kind,
        'title': title,
        'description': description,
        'category': category,
        'impact': impact
    }


def _budget_insights(utilization):
    insights = []
    for budget in utilization:
        spent, limit = budget['spent'], budget['limit']

        if spent > limit:
            insights.append(_insight(
                f"budget-{budget['id']}",
                'warning',
                f"Budget Exceeded: {budget['category']}",
                f"You've spent {format_currency(spent)} out of {format_currency(limit)} budget.",
                'high',
                category=budget['category']
            ))
        elif spent > limit * APPROACHING_LIMIT_RATIO:
            used = round_half_up(spent / limit * 100)
            insights.append(_insight(
                f"budget-warning-{budget['id']}",
                'warning',
                f"Approaching Limit: {budget['category']}",
                f"You've used {used}% of your {budget['category']} budget.",
                'medium',
                category=budget['category']
            ))
    return insights


def _monthly_change_insight(this_month, last_month):
    change = percent_change(
        total_by_kind(this_month, EXPENSE),
        total_by_kind(last_month, EXPENSE)
    )

    if change > MONTHLY_CHANGE_THRESHOLD:
        return _insight(
            'spending-increase',
            'warning',
            'Spending Increased',
            f"Your spending is {round_half_up(change)}% higher than last month.",
            'high'
        )
    if change < -MONTHLY_CHANGE_THRESHOLD:
        return _insight(
            'spending-decrease',
            'success',
            'Great Progress!',
            f"You've reduced spending by {abs(round_half_up(change))}% compared to last month.",
            'high'
        )
    return None


def _top_category_insight(this_month):
    categories = group_by_category(expenses_only(this_month))
    if not categories:
        return None

    # max() keeps the first of equal amounts, i.e. the first category seen
    highest = max(categories, key=lambda c: c['amount'])
    return _insight(
        f"highest-spending-{_slug(highest['category'])}",
        'info',
        'Top Spending Category',
        f"{highest['category']} accounts for {round_half_up(highest['percentage'])}% "
        f"of your expenses ({format_currency(highest['amount'])}).",
        'medium',
        category=highest['category']
    )


def generate_insights(transactions, budgets, now=None):
    """
    Generate insights for the month containing `now`.

    Budget rules use this month's same-category expenses; the comparison
    rule uses this month against the previous calendar month.
    """
    if now is None:
        now = datetime.now()

    this_month = filter_by_month(transactions, now)
    last_month = filter_by_month(transactions, shift_month(now, -1))

    insights = _budget_insights(month_utilization(budgets, this_month))

    change = _monthly_change_insight(this_month, last_month)
    if change:
        insights.append(change)

    top = _top_category_insight(this_month)
    if top:
        insights.append(top)

    return insights


def prediction_insights(patterns):
    """One low-impact prediction insight per category whose spending is trending up.

    Labels that only differ in punctuation ("Food & Dining", "Food-Dining")
    share a slug; later ones get a digest of the label appended.
    """
    insights = []
    seen = set()
    for pattern in patterns:
        if pattern['trend'] != 'increasing':
            continue
        insight_id = f"prediction-{_slug(pattern['category'])}"
        if insight_id in seen:
            insight_id = f"{insight_id}-{_digest(pattern['category'])}"
        seen.add(insight_id)
        insights.append(_insight(
            insight_id,
            'prediction',
            f"Rising Spend: {pattern['category']}",
            f"{pattern['category']} is trending up. Expect around "
            f"{format_currency(pattern['prediction'])} next month "
            f"(average {format_currency(pattern['average_spending'])}).",
            'low',
            category=pattern['category']
        ))
    return insights
