"""
Budget utilization and budget management.
"""
from datetime import datetime

from dateutil.relativedelta import relativedelta

from analytics import expenses_only, filter_by_range, to_date
from formatting import percent_of
from models import get_session, Budget, Transaction

PERIOD_WINDOWS = {
    'WEEKLY': relativedelta(days=7),
    'MONTHLY': relativedelta(months=1),
    'YEARLY': relativedelta(years=1),
}


def period_start(period, now):
    """Start of the trailing window for a budget period, measured back from `now`."""
    window = PERIOD_WINDOWS.get((period or '').upper(), PERIOD_WINDOWS['MONTHLY'])
    return now - window


def _category_spend(budget, transactions):
    return sum(t.amount for t in expenses_only(transactions) if t.category == budget.category)


def _utilization(budget, spent):
    result = budget.to_dict()
    result.update({
        'spent': spent,
        'remaining': budget.limit - spent,
        'percentage': percent_of(spent, budget.limit)
    })
    return result


def with_utilization(budgets, transactions, now=None):
    """
    Attach `spent` to each budget.

    `spent` is the sum of same-category expenses inside the budget's
    trailing window (7 days, 1 month or 1 year back from `now`). Returns new
    dicts; the budgets themselves are left untouched.
    """
    if now is None:
        now = datetime.now()

    results = []
    for budget in budgets:
        window = filter_by_range(transactions, period_start(budget.period, now), now)
        results.append(_utilization(budget, _category_spend(budget, window)))
    return results


def month_utilization(budgets, transactions):
    """Attach `spent` computed over exactly `transactions` (typically one calendar month)."""
    return [_utilization(budget, _category_spend(budget, transactions)) for budget in budgets]


class BudgetManager:
    """Manage a user's budgets."""

    def __init__(self, user_id):
        self.user_id = user_id

    def get_budgets(self, now=None):
        """Get all budgets for the user with trailing-window spend."""
        if now is None:
            now = datetime.now()

        session = get_session()
        try:
            budgets = session.query(Budget).filter_by(
                user_id=self.user_id
            ).order_by(Budget.category).all()

            # The yearly window is the widest one
            earliest = to_date(period_start('YEARLY', now))
            transactions = session.query(Transaction).filter(
                Transaction.user_id == self.user_id,
                Transaction.kind == 'EXPENSE',
                Transaction.date >= earliest
            ).all()

            return with_utilization(budgets, transactions, now)
        finally:
            session.close()

    def create_budget(self, category, limit, period):
        """Create a budget. Returns None if one already exists for the category and period."""
        session = get_session()
        try:
            period = period.upper()
            existing = session.query(Budget).filter_by(
                user_id=self.user_id, category=category, period=period
            ).first()

            if existing:
                return None

            budget = Budget(
                user_id=self.user_id,
                category=category,
                limit=float(limit),
                period=period
            )
            session.add(budget)
            session.commit()

            return _utilization(budget, 0)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
