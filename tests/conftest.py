from datetime import datetime
from decimal import Decimal

from spend_insights_lib import Budget, Expense


def make_expense(amount, category="Food", day=4, month=3, year=2024, method="UPI", **kwargs):
    return Expense(
        amount=Decimal(str(amount)),
        category=category,
        date=datetime(year, month, day, 10, 30),
        payment_method=method,
        **kwargs,
    )


def make_budget(amount, category="Food", month="2024-03", **kwargs):
    return Budget(amount=Decimal(str(amount)), category=category, month=month, **kwargs)

