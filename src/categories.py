"""
Recommended category labels and their chart colors.

Categories are free-form on transactions and budgets; these lists only
drive form suggestions and the chart palette.
"""

EXPENSE_CATEGORIES = [
    'Food & Dining',
    'Transportation',
    'Shopping',
    'Entertainment',
    'Bills & Utilities',
    'Healthcare',
    'Education',
    'Travel',
    'Groceries',
    'Other',
]

INCOME_CATEGORIES = [
    'Salary',
    'Freelance',
    'Investment',
    'Business',
    'Gift',
    'Other',
]

FALLBACK_CATEGORY = 'Other'

CATEGORY_COLORS = {
    'Food & Dining': '#FF6384',
    'Transportation': '#36A2EB',
    'Shopping': '#FFCE56',
    'Entertainment': '#4BC0C0',
    'Bills & Utilities': '#9966FF',
    'Healthcare': '#FF9F40',
    'Education': '#FF6384',
    'Travel': '#C9CBCF',
    'Groceries': '#4BC0C0',
    'Salary': '#36A2EB',
    'Freelance': '#FFCE56',
    'Investment': '#4BC0C0',
    'Business': '#9966FF',
    'Other': '#E7E9ED',
}


def category_color(category):
    """Chart color for a category label, falling back to the 'Other' color."""
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[FALLBACK_CATEGORY])
