"""
Dashboard data generation.
"""
from datetime import datetime

from analytics import (
    expenses_only, filter_by_month, group_by_category, monthly_trend, shift_month, summarize, to_date
)
from budget import with_utilization
from formatting import percent_change
from insights import generate_insights, prediction_insights
from predictions import predict_future_expenses


class DashboardGenerator:
    """Assemble every analytics view for one user into a single payload."""

    RECENT_LIMIT = 5

    def get_dashboard_data(self, transactions, budgets, now=None, trend_months=3):
        """
        Get all dashboard data for the month containing `now`.

        Returns dict with summary, category breakdown, budgets, comparison,
        trends, insights and predictions.
        """
        if now is None:
            now = datetime.now()

        this_month = filter_by_month(transactions, now)
        summary = summarize(this_month)
        comparison = self._get_previous_month_comparison(transactions, now, summary)
        predictions = predict_future_expenses(transactions, now)

        insights = generate_insights(transactions, budgets, now)
        insights.extend(prediction_insights(predictions))

        reference = to_date(now)
        return {
            'year': reference.year,
            'month': reference.month,
            'summary': summary,
            'totals': summarize(transactions),
            'by_category': group_by_category(expenses_only(this_month)),
            'budgets': with_utilization(budgets, transactions, now),
            'comparison': comparison,
            'trends': monthly_trend(transactions, now, trend_months),
            'insights': insights,
            'predictions': predictions,
            'recent_transactions': self._get_recent(transactions)
        }

    def _get_previous_month_comparison(self, transactions, now, current_summary):
        """Previous month summary plus the expense change against it."""
        previous = shift_month(to_date(now), -1)
        prev_summary = summarize(filter_by_month(transactions, previous))

        return {
            'prev_year': previous.year,
            'prev_month': previous.month,
            'prev_month_name': previous.strftime('%B'),
            'income': prev_summary['income'],
            'expenses': prev_summary['expenses'],
            'balance': prev_summary['balance'],
            'expense_change_pct': round(
                percent_change(current_summary['expenses'], prev_summary['expenses']), 1
            )
        }

    def _get_recent(self, transactions):
        newest = sorted(transactions, key=lambda t: (to_date(t.date), t.id or 0), reverse=True)
        return [t.to_dict() for t in newest[:self.RECENT_LIMIT]]
