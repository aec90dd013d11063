"""
SQLAlchemy models for FinVision.
"""
from datetime import datetime
from sqlalchemy import create_engine, Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

import config

Base = declarative_base()

TRANSACTION_KINDS = ('INCOME', 'EXPENSE')
BUDGET_PERIODS = ('WEEKLY', 'MONTHLY', 'YEARLY')


class User(Base):
    """Account that owns transactions and budgets."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    transactions = relationship('Transaction', back_populates='user', cascade='all, delete-orphan')
    budgets = relationship('Budget', back_populates='user', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email
        }


class Transaction(Base):
    """Income or expense record. Amounts are always positive; `kind` gives the direction."""
    __tablename__ = 'transactions'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    kind = Column(String(10), nullable=False)  # INCOME or EXPENSE
    amount = Column(Float, nullable=False)
    category = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship('User', back_populates='transactions')

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.kind,
            'amount': self.amount,
            'category': self.category,
            'description': self.description,
            'date': self.date.isoformat() if self.date else None
        }


class Budget(Base):
    """Spending limit for one category over a recurring period."""
    __tablename__ = 'budgets'
    __table_args__ = (
        UniqueConstraint('user_id', 'category', 'period', name='uq_budget_user_category_period'),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    category = Column(String(100), nullable=False)
    limit = Column('budget_limit', Float, nullable=False)
    period = Column(String(10), nullable=False, default='MONTHLY')
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship('User', back_populates='budgets')

    def to_dict(self):
        return {
            'id': self.id,
            'category': self.category,
            'limit': self.limit,
            'period': self.period
        }


# Database initialization
_engine = None
_Session = None


def get_engine(database_url=None):
    """Get or create database engine."""
    global _engine
    if _engine is None:
        _engine = create_engine(database_url or config.DATABASE_URL, echo=False)
    return _engine


def get_session():
    """Get a new database session."""
    global _Session
    if _Session is None:
        _Session = sessionmaker(bind=get_engine())
    return _Session()


def init_db(database_url=None):
    """Initialize the database engine and create any missing tables."""
    global _engine, _Session
    _engine = create_engine(database_url or config.DATABASE_URL, echo=False)
    _Session = sessionmaker(bind=_engine)

    Base.metadata.create_all(_engine)
    return _engine


if __name__ == '__main__':
    init_db()
    print(f"Database initialized at {config.DATABASE_URL}")
