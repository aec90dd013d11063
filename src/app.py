"""
FinVision - Main Flask Application
"""
import logging
import os
import sys

from dateutil import parser as date_parser
from flask import Flask, g, jsonify, request
from flask_cors import CORS
from sqlalchemy import text

# Add src to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import config
from analytics_routes import analytics_bp
from auth import login_required
from auth_routes import auth_bp
from budget import BudgetManager
from categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES, CATEGORY_COLORS
from models import init_db, get_session, Budget, Transaction, TRANSACTION_KINDS, BUDGET_PERIODS

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)
CORS(app, supports_credentials=True)

# Initialize database
init_db(config.DATABASE_URL)

app.register_blueprint(auth_bp)
app.register_blueprint(analytics_bp)


def _positive_number(value):
    """Parse a positive float, or None."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


# =============================================================================
# API - Health & reference data
# =============================================================================

@app.route('/api/health')
def health():
    """Check the database connection."""
    session = get_session()
    try:
        session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'ok',
            'message': 'Database connection successful',
            'database': 'connected'
        })
    except Exception as e:
        logger.exception("Health check failed")
        return jsonify({
            'error': 'Database connection failed',
            'message': str(e) or 'Could not connect to database'
        }), 503
    finally:
        session.close()


@app.route('/api/categories')
def get_categories():
    """Recommended categories and their chart colors."""
    return jsonify({
        'expense': EXPENSE_CATEGORIES,
        'income': INCOME_CATEGORIES,
        'colors': CATEGORY_COLORS
    })


# =============================================================================
# API - Transactions
# =============================================================================

@app.route('/api/transactions')
@login_required
def get_transactions():
    """List the user's transactions, newest first."""
    session = get_session()
    try:
        query = session.query(Transaction).filter(Transaction.user_id == g.user_id)

        txn_type = request.args.get('type', '')
        category = request.args.get('category', '')
        start_date = request.args.get('startDate')
        end_date = request.args.get('endDate')

        if txn_type:
            query = query.filter(Transaction.kind == txn_type.upper())
        if category:
            query = query.filter(Transaction.category == category)
        try:
            if start_date:
                query = query.filter(Transaction.date >= date_parser.parse(start_date).date())
            if end_date:
                query = query.filter(Transaction.date <= date_parser.parse(end_date).date())
        except (ValueError, OverflowError):
            return jsonify({'error': 'Invalid date filter'}), 400

        transactions = query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
        return jsonify({'transactions': [t.to_dict() for t in transactions]})
    except Exception:
        logger.exception("Get transactions error")
        return jsonify({'error': 'An error occurred while fetching transactions'}), 500
    finally:
        session.close()


@app.route('/api/transactions', methods=['POST'])
@login_required
def create_transaction():
    """Record a new income or expense."""
    data = request.get_json(silent=True) or {}
    kind = (data.get('type') or '').upper()
    category = (data.get('category') or '').strip()
    description = (data.get('description') or '').strip()

    if not kind or not data.get('amount') or not category or not description or not data.get('date'):
        return jsonify({'error': 'All fields are required'}), 400

    if kind not in TRANSACTION_KINDS:
        return jsonify({'error': 'Type must be income or expense'}), 400

    amount = _positive_number(data['amount'])
    if amount is None:
        return jsonify({'error': 'Amount must be greater than 0'}), 400

    try:
        txn_date = date_parser.parse(str(data['date'])).date()
    except (ValueError, OverflowError):
        return jsonify({'error': 'Invalid date'}), 400

    session = get_session()
    try:
        transaction = Transaction(
            user_id=g.user_id,
            kind=kind,
            amount=amount,
            category=category,
            description=description,
            date=txn_date
        )
        session.add(transaction)
        session.commit()

        return jsonify({
            'message': 'Transaction created successfully',
            'transaction': transaction.to_dict()
        }), 201
    except Exception as e:
        session.rollback()
        logger.exception("Create transaction error")
        return jsonify({'error': str(e)}), 500
    finally:
        session.close()


@app.route('/api/transactions/<int:transaction_id>', methods=['DELETE'])
@login_required
def delete_transaction(transaction_id):
    """Delete a transaction."""
    session = get_session()
    try:
        transaction = session.query(Transaction).filter_by(id=transaction_id).first()
        if not transaction:
            return jsonify({'error': 'Transaction not found'}), 404
        if transaction.user_id != g.user_id:
            return jsonify({'error': 'Unauthorized'}), 403

        session.delete(transaction)
        session.commit()

        return jsonify({'success': True, 'message': 'Transaction deleted successfully'})
    except Exception as e:
        session.rollback()
        logger.exception("Delete transaction error")
        return jsonify({'error': str(e)}), 500
    finally:
        session.close()


# =============================================================================
# API - Budget
# =============================================================================

@app.route('/api/budgets')
@login_required
def get_budgets():
    """Get all budgets with their current spend."""
    try:
        budgets = BudgetManager(g.user_id).get_budgets()
        return jsonify({'budgets': budgets})
    except Exception:
        logger.exception("Get budgets error")
        return jsonify({'error': 'An error occurred while fetching budgets'}), 500


@app.route('/api/budgets', methods=['POST'])
@login_required
def create_budget():
    """Create a new budget."""
    data = request.get_json(silent=True) or {}
    category = (data.get('category') or '').strip()
    period = (data.get('period') or '').upper()

    if not category or not data.get('limit') or not period:
        return jsonify({'error': 'Category, limit, and period are required'}), 400

    if period not in BUDGET_PERIODS:
        return jsonify({'error': 'Period must be weekly, monthly or yearly'}), 400

    limit = _positive_number(data['limit'])
    if limit is None:
        return jsonify({'error': 'Limit must be greater than 0'}), 400

    try:
        budget = BudgetManager(g.user_id).create_budget(category, limit, period)
    except Exception:
        logger.exception("Create budget error")
        return jsonify({'error': 'An error occurred while creating budget'}), 500

    if budget is None:
        return jsonify({'error': 'Budget already exists for this category and period'}), 409

    return jsonify({'message': 'Budget created successfully', 'budget': budget}), 201


@app.route('/api/budgets/<int:budget_id>', methods=['PUT'])
@login_required
def update_budget(budget_id):
    """Change a budget's limit."""
    data = request.get_json(silent=True) or {}
    limit = _positive_number(data.get('limit'))
    if limit is None:
        return jsonify({'error': 'Limit must be greater than 0'}), 400

    session = get_session()
    try:
        budget = session.query(Budget).filter_by(id=budget_id).first()
        if not budget:
            return jsonify({'error': 'Budget not found'}), 404
        if budget.user_id != g.user_id:
            return jsonify({'error': 'Unauthorized'}), 403

        budget.limit = limit
        session.commit()

        return jsonify({'message': 'Budget updated successfully', 'budget': budget.to_dict()})
    except Exception as e:
        session.rollback()
        logger.exception("Update budget error")
        return jsonify({'error': str(e)}), 500
    finally:
        session.close()


@app.route('/api/budgets/<int:budget_id>', methods=['DELETE'])
@login_required
def delete_budget(budget_id):
    """Delete a budget."""
    session = get_session()
    try:
        budget = session.query(Budget).filter_by(id=budget_id).first()
        if not budget:
            return jsonify({'error': 'Budget not found'}), 404
        if budget.user_id != g.user_id:
            return jsonify({'error': 'Unauthorized'}), 403

        session.delete(budget)
        session.commit()
        return jsonify({'success': True, 'message': 'Budget deleted successfully'})
    except Exception as e:
        session.rollback()
        logger.exception("Delete budget error")
        return jsonify({'error': str(e)}), 500
    finally:
        session.close()


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("FinVision")
    print("=" * 60)
    print(f"Database: {config.DATABASE_URL}")
    print(f"Starting server on http://localhost:{config.PORT}")
    print("=" * 60 + "\n")

    app.run(host=config.HOST, port=config.PORT, debug=config.ENVIRONMENT != 'production')
