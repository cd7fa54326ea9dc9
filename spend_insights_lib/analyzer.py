from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from . import aggregator, overview
from .budgets import evaluate_month
from .comparative import compare_months, monthly_summaries
from .constants import DEFAULT_CURRENCY_SYMBOL
from .models import (
    AnalyticsReport,
    Budget,
    BudgetSummary,
    DashboardSummary,
    Expense,
    Insight,
    MonthlyReport,
    Suggestion,
)
from .suggestions import compute_suggestions
from .windows import month_window, window_for_key

logger = logging.getLogger(__name__)


class FinanceAnalyzer:
    """
    Entry point shared by the HTTP routes and any background job so every
    caller derives budgets, insights and suggestions the same way.

    Every method is a pure function of its arguments; the analyzer only
    holds presentation settings.
    """

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> None:
        self._currency_symbol = currency_symbol

    @staticmethod
    def _now(now: Optional[datetime]) -> datetime:
        return now or datetime.now()

    def budget_summary(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        month: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> BudgetSummary:
        now = self._now(now)
        month = month or month_window(now).key
        window = window_for_key(month, tzinfo=now.tzinfo)
        selected = window.select(expenses) if window else []
        return evaluate_month(budgets, aggregator.category_totals(selected), month)

    def insights(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        now: Optional[datetime] = None,
    ) -> List[Insight]:
        now = self._now(now)
        return compare_months(
            expenses,
            budgets,
            month_window(now),
            month_window(now, 1),
            currency_symbol=self._currency_symbol,
        )

    def suggestions(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        now: Optional[datetime] = None,
        user_id: str = "",
    ) -> List[Suggestion]:
        return compute_suggestions(
            expenses,
            budgets,
            self._now(now),
            user_id=user_id,
            currency_symbol=self._currency_symbol,
        )

    def dashboard(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        now: Optional[datetime] = None,
    ) -> DashboardSummary:
        return overview.dashboard_summary(expenses, budgets, self._now(now))

    def analytics(
        self,
        expenses: Iterable[Expense],
        months: int = 6,
        now: Optional[datetime] = None,
    ) -> AnalyticsReport:
        return overview.analytics_report(expenses, self._now(now), months)

    def monthly_report(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        month: str,
        now: Optional[datetime] = None,
    ) -> MonthlyReport:
        return overview.monthly_report(expenses, budgets, month, tz=self._now(now).tzinfo)

    def summarize(
        self,
        expenses: Iterable[Expense],
        budgets: Iterable[Budget],
        now: Optional[datetime] = None,
        user_id: str = "",
    ) -> Dict[str, Any]:
        expenses = list(expenses)
        budgets = list(budgets)
        now = self._now(now)
        current, previous = month_window(now), month_window(now, 1)

        summary = {
            "month": current.key,
            "budgets": self.budget_summary(expenses, budgets, now=now),
            "insights": self.insights(expenses, budgets, now),
            "suggestions": self.suggestions(expenses, budgets, now, user_id),
            "monthly_summaries": monthly_summaries(expenses, current, previous),
        }
        logger.info(
            f"Summarized {len(expenses)} expenses and {len(budgets)} budgets for {current.key}: "
            f"{len(summary['insights'])} insights, {len(summary['suggestions'])} suggestions"
        )
        return summary
