"""
Analytics Routes - Flask blueprint for the analytics API
"""
import logging
from datetime import datetime

from dateutil import parser as date_parser
from flask import Blueprint, g, jsonify, request

import config
from analytics import expenses_only, filter_by_month, group_by_category, monthly_trend, summarize
from auth import login_required
from budget import with_utilization
from dashboard import DashboardGenerator
from insights import generate_insights
from models import get_session, Budget, Transaction
from predictions import predict_future_expenses
from sample_data import build_sample_data

logger = logging.getLogger(__name__)

analytics_bp = Blueprint('analytics', __name__, url_prefix='/api/analytics')

MAX_TREND_MONTHS = 24

dashboard_gen = DashboardGenerator()


def _reference_now():
    """The `as_of` query parameter as a datetime, or the current time."""
    as_of = request.args.get('as_of')
    if not as_of:
        return datetime.now()
    return date_parser.parse(as_of)


def _load_user_data(user_id):
    """All transactions and budgets of a user."""
    session = get_session()
    try:
        transactions = session.query(Transaction).filter_by(user_id=user_id).all()
        budgets = session.query(Budget).filter_by(user_id=user_id).order_by(Budget.category).all()
        return transactions, budgets
    finally:
        session.close()


def _failure(message, error):
    logger.exception(message)
    return jsonify({'success': False, 'error': str(error)}), 500


@analytics_bp.errorhandler(ValueError)
@analytics_bp.errorhandler(OverflowError)
def _bad_reference_date(error):
    return jsonify({'success': False, 'error': f'Invalid as_of date: {error}'}), 400


@analytics_bp.route('/summary', methods=['GET'])
@login_required
def get_summary():
    """Income/expense summary for the month of `as_of` (or all time with ?all=1)."""
    now = _reference_now()
    try:
        transactions, _ = _load_user_data(g.user_id)
        if not request.args.get('all', type=int, default=0):
            transactions = filter_by_month(transactions, now)
        return jsonify({'success': True, 'data': summarize(transactions)})
    except Exception as e:
        return _failure("Summary error", e)


@analytics_bp.route('/categories', methods=['GET'])
@login_required
def get_categories():
    """Category breakdown of the month's expenses (or income with ?type=income)."""
    now = _reference_now()
    kind = request.args.get('type', 'expense').upper()
    try:
        transactions, _ = _load_user_data(g.user_id)
        month = filter_by_month(transactions, now)
        selected = [t for t in month if t.kind == kind]
        return jsonify({'success': True, 'data': group_by_category(selected)})
    except Exception as e:
        return _failure("Category breakdown error", e)


@analytics_bp.route('/budgets', methods=['GET'])
@login_required
def get_budget_utilization():
    """Budgets with their trailing-window spend."""
    now = _reference_now()
    try:
        transactions, budgets = _load_user_data(g.user_id)
        return jsonify({'success': True, 'data': with_utilization(budgets, expenses_only(transactions), now)})
    except Exception as e:
        return _failure("Budget utilization error", e)


@analytics_bp.route('/insights', methods=['GET'])
@login_required
def get_insights():
    """Rule-based spending insights."""
    now = _reference_now()
    try:
        transactions, budgets = _load_user_data(g.user_id)
        return jsonify({'success': True, 'data': generate_insights(transactions, budgets, now)})
    except Exception as e:
        return _failure("Insights error", e)


@analytics_bp.route('/predictions', methods=['GET'])
@login_required
def get_predictions():
    """Per-category spending trend and next-month prediction."""
    now = _reference_now()
    try:
        transactions, _ = _load_user_data(g.user_id)
        return jsonify({'success': True, 'data': predict_future_expenses(transactions, now)})
    except Exception as e:
        return _failure("Predictions error", e)


@analytics_bp.route('/trends', methods=['GET'])
@login_required
def get_trends():
    """Monthly income/expense totals."""
    now = _reference_now()
    months = request.args.get('months', 3, type=int)
    try:
        transactions, _ = _load_user_data(g.user_id)
        trend = monthly_trend(transactions, now, min(max(months, 1), MAX_TREND_MONTHS))
        return jsonify({'success': True, 'data': trend})
    except Exception as e:
        return _failure("Trends error", e)


@analytics_bp.route('/dashboard', methods=['GET'])
@login_required
def get_analytics_dashboard():
    """Get all analytics data for the dashboard."""
    now = _reference_now()
    try:
        transactions, budgets = _load_user_data(g.user_id)
        data = dashboard_gen.get_dashboard_data(transactions, budgets, now)
        return jsonify({'success': True, 'data': data})
    except Exception as e:
        return _failure("Dashboard error", e)


@analytics_bp.route('/demo', methods=['GET'])
def get_demo_dashboard():
    """Dashboard built from the sample data set; no account needed."""
    if not config.DEMO_MODE:
        return jsonify({'success': False, 'error': 'Demo mode is disabled'}), 404

    now = _reference_now()
    try:
        data = build_sample_data(now)
        payload = dashboard_gen.get_dashboard_data(data['transactions'], data['budgets'], now)
        return jsonify({'success': True, 'data': payload})
    except Exception as e:
        return _failure("Demo dashboard error", e)
