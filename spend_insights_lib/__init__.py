"""
spend_insights_lib
~~~~~~~~~~~~~~~~~~

Insight and budget-analysis engine for the Smart Expense Tracker. It turns a
user's expense and budget records into budget progress, month-over-month
insights and ranked suggestions. Everything here is pure computation so the
same results come out of the API, background jobs, or a notebook.
"""

from .analyzer import FinanceAnalyzer
from .models import (
    AnalyticsReport,
    Budget,
    BudgetProgress,
    BudgetSummary,
    DashboardSummary,
    Expense,
    Insight,
    MonthlyReport,
    MonthlySummary,
    Suggestion,
)

__all__ = [
    "AnalyticsReport",
    "Budget",
    "BudgetProgress",
    "BudgetSummary",
    "DashboardSummary",
    "Expense",
    "FinanceAnalyzer",
    "Insight",
    "MonthlyReport",
    "MonthlySummary",
    "Suggestion",
]
