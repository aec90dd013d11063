"""
Demo data for FinVision.

`build_sample_data` returns a fresh set of transient transactions and
budgets every call, dated in the reference month and the month before, so
the demo insights always have a "this month" and a "last month" to compare.
"""
from datetime import date

from analytics import shift_month, to_date
from auth import hash_password
from models import init_db, get_session, Budget, Transaction, User

# (kind, amount, category, description, day); current month first
CURRENT_MONTH = [
    ('EXPENSE', 5000, 'Food & Dining', 'Groceries', 5),
    ('EXPENSE', 2000, 'Transportation', 'Fuel', 8),
    ('EXPENSE', 3500, 'Shopping', 'Clothing', 10),
    ('EXPENSE', 1500, 'Entertainment', 'Movies & Dining', 12),
    ('EXPENSE', 4000, 'Bills & Utilities', 'Electricity & Internet', 1),
    ('EXPENSE', 2500, 'Healthcare', 'Medical checkup', 7),
    ('INCOME', 50000, 'Salary', 'Monthly salary', 1),
    ('INCOME', 10000, 'Freelance', 'Project work', 15),
]

PREVIOUS_MONTH = [
    ('EXPENSE', 4500, 'Food & Dining', 'Groceries', 5),
    ('EXPENSE', 1800, 'Transportation', 'Fuel', 8),
    ('EXPENSE', 2000, 'Shopping', 'Electronics', 10),
    ('INCOME', 50000, 'Salary', 'Monthly salary', 1),
]

BUDGETS = [
    ('Food & Dining', 8000),
    ('Transportation', 3000),
    ('Shopping', 5000),
    ('Entertainment', 3000),
    ('Bills & Utilities', 5000),
    ('Healthcare', 4000),
]


def build_sample_data(reference=None, user_id=None):
    """
    Build demo transactions and monthly budgets.

    Returns {'transactions': [...], 'budgets': [...]} of unsaved model
    instances with ids already filled in.
    """
    reference = to_date(reference) if reference is not None else date.today()
    this_month = date(reference.year, reference.month, 1)
    last_month = shift_month(this_month, -1)

    transactions = []
    for month_start, rows in ((this_month, CURRENT_MONTH), (last_month, PREVIOUS_MONTH)):
        for kind, amount, category, description, day in rows:
            transactions.append(Transaction(
                id=len(transactions) + 1,
                user_id=user_id,
                kind=kind,
                amount=float(amount),
                category=category,
                description=description,
                date=month_start.replace(day=day)
            ))

    budgets = [
        Budget(id=i, user_id=user_id, category=category, limit=float(limit), period='MONTHLY')
        for i, (category, limit) in enumerate(BUDGETS, start=1)
    ]

    return {'transactions': transactions, 'budgets': budgets}


def seed_demo_user(email='demo@finvision.app', password='demo1234', name='Demo User'):
    """Create (or refill) a demo account with the sample data."""
    init_db()
    session = get_session()

    try:
        user = session.query(User).filter_by(email=email.lower()).first()
        if not user:
            user = User(name=name, email=email.lower(), password_hash=hash_password(password))
            session.add(user)
            session.commit()
            print(f"✓ Created demo user {user.email}")

        session.query(Transaction).filter_by(user_id=user.id).delete()
        session.query(Budget).filter_by(user_id=user.id).delete()

        data = build_sample_data(user_id=user.id)
        for record in data['transactions'] + data['budgets']:
            record.id = None
            session.add(record)
        session.commit()

        print(f"✓ Seeded {len(data['transactions'])} transactions and {len(data['budgets'])} budgets")
        return {
            'success': True,
            'user_id': user.id,
            'transactions': len(data['transactions']),
            'budgets': len(data['budgets'])
        }
    except Exception as e:
        session.rollback()
        print(f"Error seeding demo data: {e}")
        return {'success': False, 'error': str(e)}
    finally:
        session.close()


if __name__ == '__main__':
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == 'seed':
        seed_demo_user(*sys.argv[2:4])
    else:
        print("Usage: python sample_data.py seed [email] [password]")
        print("  seed - Create a demo user and fill it with sample transactions and budgets")
