from datetime import date, datetime

from insights import generate_insights, prediction_insights
from models import Budget, Transaction
from predictions import predict_future_expenses

NOW = datetime(2025, 11, 15, 10, 0)


def expense(amount, category, day=date(2025, 11, 5), tid=None):
    return Transaction(id=tid, kind='EXPENSE', amount=amount, category=category, description='', date=day)


def by_id(insights):
    return {i['id']: i for i in insights}


def test_over_budget_warning():
    budgets = [Budget(id=1, category='Food', limit=8000, period='MONTHLY')]
    transactions = [expense(5000, 'Food'), expense(4000, 'Food', date(2025, 11, 12))]

    insight = by_id(generate_insights(transactions, budgets, NOW))['budget-1']

    assert insight['type'] == 'warning'
    assert insight['impact'] == 'high'
    assert insight['category'] == 'Food'
    assert insight['title'] == 'Budget Exceeded: Food'
    assert insight['description'] == "You've spent ₹9,000 out of ₹8,000 budget."


def test_approaching_limit_warning():
    budgets = [Budget(id=2, category='Travel', limit=1000, period='MONTHLY')]

    insights = by_id(generate_insights([expense(850, 'Travel')], budgets, NOW))

    assert 'budget-2' not in insights
    insight = insights['budget-warning-2']
    assert insight['impact'] == 'medium'
    assert '85%' in insight['description']


def test_exactly_eighty_percent_is_not_approaching():
    budgets = [Budget(id=3, category='Travel', limit=1000, period='MONTHLY')]

    insights = by_id(generate_insights([expense(800, 'Travel')], budgets, NOW))

    assert 'budget-warning-3' not in insights


def test_budget_rules_only_count_this_month():
    budgets = [Budget(id=4, category='Food', limit=1000, period='MONTHLY')]
    transactions = [expense(900, 'Food', date(2025, 10, 30)), expense(100, 'Food')]

    insights = by_id(generate_insights(transactions, budgets, NOW))

    assert 'budget-4' not in insights
    assert 'budget-warning-4' not in insights


def test_twenty_percent_increase_is_not_flagged():
    transactions = [expense(6000, 'Food'), expense(5000, 'Food', date(2025, 10, 5))]

    insights = by_id(generate_insights(transactions, [], NOW))

    assert 'spending-increase' not in insights
    assert 'spending-decrease' not in insights


def test_spending_increase_warning():
    transactions = [expense(6100, 'Food'), expense(5000, 'Food', date(2025, 10, 5))]

    insight = by_id(generate_insights(transactions, [], NOW))['spending-increase']

    assert insight['type'] == 'warning'
    assert insight['impact'] == 'high'
    assert insight['description'] == 'Your spending is 22% higher than last month.'


def test_spending_decrease_success():
    transactions = [expense(3000, 'Food'), expense(5000, 'Food', date(2025, 10, 5))]

    insight = by_id(generate_insights(transactions, [], NOW))['spending-decrease']

    assert insight['type'] == 'success'
    assert insight['title'] == 'Great Progress!'
    assert '40%' in insight['description']


def test_no_spending_last_month_does_not_fail():
    insights = generate_insights([expense(500, 'Food')], [], NOW)

    ids = [i['id'] for i in insights]
    assert 'spending-increase' not in ids
    assert 'spending-decrease' not in ids
    assert ids == ['highest-spending-food']


def test_top_category_reports_share():
    transactions = [expense(300, 'Transportation'), expense(900, 'Food & Dining'), expense(300, 'Shopping')]

    insight = generate_insights(transactions, [], NOW)[-1]

    assert insight['id'] == 'highest-spending-food-dining'
    assert insight['type'] == 'info'
    assert insight['category'] == 'Food & Dining'
    assert insight['description'] == 'Food & Dining accounts for 60% of your expenses (₹900).'


def test_top_category_tie_goes_to_first_seen():
    transactions = [expense(400, 'Shopping'), expense(400, 'Travel')]
    assert generate_insights(transactions, [], NOW)[-1]['category'] == 'Shopping'

    transactions.reverse()
    assert generate_insights(transactions, [], NOW)[-1]['category'] == 'Travel'


def test_income_does_not_count_as_spending():
    income = Transaction(kind='INCOME', amount=50000, category='Salary', description='', date=date(2025, 11, 1))
    assert generate_insights([income], [], NOW) == []


def test_rules_fire_in_order_and_output_is_repeatable():
    budgets = [
        Budget(id=1, category='Food', limit=1000, period='MONTHLY'),
        Budget(id=2, category='Travel', limit=1000, period='MONTHLY'),
    ]
    transactions = [
        expense(1200, 'Food', tid=1),
        expense(900, 'Travel', tid=2),
        expense(500, 'Food', date(2025, 10, 3), tid=3),
    ]

    first = generate_insights(transactions, budgets, NOW)
    second = generate_insights(transactions, budgets, NOW)

    assert [i['id'] for i in first] == [
        'budget-1', 'budget-warning-2', 'spending-increase', 'highest-spending-food'
    ]
    assert first == second


def test_empty_input_produces_no_insights():
    assert generate_insights([], [], NOW) == []


def test_prediction_insights_only_for_rising_categories():
    patterns = [
        {'category': 'Rent', 'trend': 'increasing', 'average_spending': 1166.67, 'prediction': 1283},
        {'category': 'Food', 'trend': 'stable', 'average_spending': 500.0, 'prediction': 500},
    ]

    insights = prediction_insights(patterns)

    assert len(insights) == 1
    assert insights[0]['id'] == 'prediction-rent'
    assert insights[0]['type'] == 'prediction'
    assert insights[0]['impact'] == 'low'
    assert '₹1,283' in insights[0]['description']


def test_prediction_ids_are_distinct_for_non_latin_categories():
    patterns = predict_future_expenses([expense(500, 'भोजन'), expense(300, 'यात्रा')], NOW)

    ids = [i['id'] for i in prediction_insights(patterns)]

    assert len(ids) == 2
    assert len(set(ids)) == 2
    assert 'prediction-' not in ids
    assert 'prediction-भोजन' in ids


def test_prediction_ids_stay_unique_when_labels_differ_only_in_punctuation():
    patterns = [
        {'category': 'Food & Dining', 'trend': 'increasing', 'average_spending': 100.0, 'prediction': 150},
        {'category': 'Food-Dining', 'trend': 'increasing', 'average_spending': 100.0, 'prediction': 150},
        {'category': '$$$', 'trend': 'increasing', 'average_spending': 100.0, 'prediction': 150},
    ]

    ids = [i['id'] for i in prediction_insights(patterns)]

    assert ids[0] == 'prediction-food-dining'
    assert ids[1].startswith('prediction-food-dining-')
    assert ids[2] != 'prediction-'
    assert len(set(ids)) == 3
    assert ids == [i['id'] for i in prediction_insights(patterns)]


def test_top_category_id_keeps_non_latin_label():
    insights = generate_insights([expense(700, 'यात्रा')], [], NOW)

    assert insights[-1]['id'] == 'highest-spending-यात्रा'
