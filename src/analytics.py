"""
Aggregation over transaction collections.

Everything here is a pure function over objects exposing `kind`, `amount`,
`category` and `date` (the `Transaction` model, or transient instances of
it). Inputs are assumed to be validated by the API layer: amounts positive,
dates real dates.
"""
from calendar import monthrange
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from categories import category_color
from formatting import percent_of

INCOME = 'INCOME'
EXPENSE = 'EXPENSE'


def to_date(value):
    """Calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_kind(transaction, kind):
    return (transaction.kind or '').upper() == kind.upper()


def expenses_only(transactions):
    return [t for t in transactions if is_kind(t, EXPENSE)]


def total_by_kind(transactions, kind):
    """Sum of amounts for transactions of the given kind (0 when none match)."""
    return sum(t.amount for t in transactions if is_kind(t, kind))


def group_by_category(transactions):
    """
    Break transactions down by category.

    Returns a list of dicts with category, amount, percentage of the total
    and chart color, in first-seen category order. Percentages are 0 when
    the total is 0.
    """
    totals = {}
    for t in transactions:
        totals[t.category] = totals.get(t.category, 0) + t.amount

    grand_total = sum(totals.values())

    return [
        {
            'category': category,
            'amount': amount,
            'percentage': percent_of(amount, grand_total),
            'color': category_color(category)
        }
        for category, amount in totals.items()
    ]


def month_bounds(reference):
    """First and last calendar day of the month containing `reference`."""
    day = to_date(reference)
    last_day = monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def shift_month(reference, months):
    """Move `reference` by a whole number of months (negative goes back)."""
    return reference + relativedelta(months=months)


def filter_by_range(transactions, start, end):
    """Transactions dated between `start` and `end`, both inclusive."""
    start, end = to_date(start), to_date(end)
    return [t for t in transactions if start <= to_date(t.date) <= end]


def filter_by_month(transactions, reference):
    """Transactions falling in the calendar month that contains `reference`."""
    start, end = month_bounds(reference)
    return filter_by_range(transactions, start, end)


def summarize(transactions):
    """Income, expenses, balance and savings rate for a set of transactions."""
    income = total_by_kind(transactions, INCOME)
    expenses = total_by_kind(transactions, EXPENSE)
    balance = income - expenses

    return {
        'income': round(income, 2),
        'expenses': round(expenses, 2),
        'balance': round(balance, 2),
        'savings_rate': round(percent_of(balance, income), 1),
        'transaction_count': len(transactions)
    }


def monthly_trend(transactions, reference, months=3):
    """Income/expense totals per calendar month, oldest first, ending with `reference`'s month."""
    trend = []
    for offset in range(months - 1, -1, -1):
        month_start = month_bounds(shift_month(to_date(reference), -offset))[0]
        month_transactions = filter_by_month(transactions, month_start)

        income = total_by_kind(month_transactions, INCOME)
        expenses = total_by_kind(month_transactions, EXPENSE)

        trend.append({
            'month': month_start.month,
            'year': month_start.year,
            'label': month_start.strftime('%b'),
            'income': round(income, 2),
            'expenses': round(expenses, 2),
            'net': round(income - expenses, 2)
        })

    return trend
