from datetime import date, datetime

import pytest

from models import Transaction
from predictions import classify_trend, predict_future_expenses

NOW = datetime(2025, 11, 15, 8, 0)


def expense(amount, category, day):
    return Transaction(kind='EXPENSE', amount=amount, category=category, description='', date=day)


def by_category(patterns):
    return {p['category']: p for p in patterns}


def test_rising_rent_is_increasing():
    transactions = [
        expense(1000, 'Rent', date(2025, 9, 1)),
        expense(1000, 'Rent', date(2025, 10, 1)),
        expense(1500, 'Rent', date(2025, 11, 1)),
    ]

    rent = by_category(predict_future_expenses(transactions, NOW))['Rent']

    assert rent['trend'] == 'increasing'
    assert rent['average_spending'] == pytest.approx(1166.67)
    assert rent['latest'] == 1500
    assert rent['prediction'] == 1283
    assert rent['monthly_amounts'] == [1000, 1000, 1500]


def test_flat_spending_is_stable():
    transactions = [expense(400, 'Food', date(2025, m, 10)) for m in (9, 10, 11)]

    food = predict_future_expenses(transactions, NOW)[0]

    assert food['trend'] == 'stable'
    assert food['prediction'] == 400


def test_missing_months_count_as_zero():
    # Only spent two months ago: average over three months, latest is 0
    gym = predict_future_expenses([expense(300, 'Gym', date(2025, 9, 3))], NOW)[0]

    assert gym['average_spending'] == pytest.approx(100.0)
    assert gym['latest'] == 0
    assert gym['trend'] == 'decreasing'
    assert gym['prediction'] == 90
    assert gym['monthly_amounts'] == [300, 0, 0]


def test_category_only_in_current_month():
    new = predict_future_expenses([expense(600, 'Pets', date(2025, 11, 2))], NOW)[0]

    assert new['average_spending'] == pytest.approx(200.0)
    assert new['trend'] == 'increasing'
    assert new['prediction'] == 220


def test_order_and_window():
    transactions = [
        expense(100, 'Travel', date(2025, 9, 5)),
        expense(100, 'Food', date(2025, 11, 5)),
        expense(100, 'Shopping', date(2025, 10, 5)),
        expense(999, 'Old', date(2025, 8, 31)),
        Transaction(kind='INCOME', amount=5000, category='Salary', description='', date=date(2025, 11, 1)),
    ]

    patterns = predict_future_expenses(transactions, NOW)

    assert [p['category'] for p in patterns] == ['Food', 'Shopping', 'Travel']


def test_no_expenses_no_patterns():
    assert predict_future_expenses([], NOW) == []


@pytest.mark.parametrize('latest, average, expected', [
    (111, 100, 'increasing'),
    (110, 100, 'stable'),
    (90, 100, 'stable'),
    (89, 100, 'decreasing'),
])
def test_classify_trend_band_edges(latest, average, expected):
    assert classify_trend(latest, average) == expected
