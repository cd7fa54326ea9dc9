"""
Dashboard, multi-month analytics and monthly report view models.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from . import aggregator
from .budgets import evaluate_month
from .comparative import change_percent
from .constants import STATUS_EXCEEDED
from .models import (
    AnalyticsReport,
    Budget,
    CategoryShare,
    DailyTotal,
    DashboardSummary,
    Expense,
    MonthlyReport,
    MonthTrend,
)
from .suggestions import top_category
from .windows import day_window, month_window, trailing_windows, window_for_key

TREND_DAYS = 7
TOP_PAYMENT_METHODS = 3


def category_shares(totals: Dict[str, Decimal]) -> List[CategoryShare]:
    whole = sum(totals.values(), Decimal("0"))
    return [
        CategoryShare(category=category, amount=amount, percentage=aggregator.share(amount, whole) or Decimal("0"))
        for category, amount in aggregator.top_n(totals)
    ]


def daily_trend(expenses: Iterable[Expense], now: datetime, days: int = TREND_DAYS) -> List[DailyTotal]:
    expenses = list(expenses)
    trend = []
    for back in range(days - 1, -1, -1):
        window = day_window(now - timedelta(days=back))
        trend.append(
            DailyTotal(day=window.start.date().isoformat(), amount=aggregator.total(window.select(expenses)))
        )
    return trend


def dashboard_summary(expenses: Iterable[Expense], budgets: Iterable[Budget], now: datetime) -> DashboardSummary:
    expenses = list(expenses)
    window = month_window(now)
    current = window.select(expenses)
    totals = aggregator.category_totals(current)

    return DashboardSummary(
        month=window.key,
        total_spent=aggregator.total(current),
        transaction_count=len(current),
        top_category=top_category(totals),
        top_payment_methods=aggregator.top_n(aggregator.payment_method_totals(current), TOP_PAYMENT_METHODS),
        categories=category_shares(totals),
        last_7_days=daily_trend(expenses, now),
        budget_alerts=evaluate_month(budgets, totals, window.key).alerts,
    )


def analytics_report(expenses: Iterable[Expense], now: datetime, months: int = 6) -> AnalyticsReport:
    """
    Per-month totals for the trailing ``months`` months (oldest first) and the
    category split across the whole period.
    """
    expenses = list(expenses)
    trends: List[MonthTrend] = []
    period: List[Expense] = []
    previous_total: Optional[Decimal] = None

    for window in trailing_windows(now, months):
        selected = window.select(expenses)
        period.extend(selected)
        month_total = aggregator.total(selected)
        trends.append(
            MonthTrend(
                month=window.key,
                total=month_total,
                category_totals=aggregator.category_totals(selected),
                growth=None if previous_total is None else change_percent(month_total, previous_total),
            )
        )
        previous_total = month_total

    total_spent = aggregator.total(period)
    monthly_growth = None
    if len(trends) >= 2:
        monthly_growth = change_percent(trends[-1].total, trends[-2].total)

    return AnalyticsReport(
        months=trends,
        categories=category_shares(aggregator.category_totals(period)),
        total_spent=total_spent,
        average_monthly=total_spent / len(trends) if trends else Decimal("0"),
        monthly_growth=monthly_growth,
    )


def monthly_report(
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    month: str,
    tz: Optional[tzinfo] = None,
) -> MonthlyReport:
    """Report for ``month``; its window is built in ``tz``, like the other views for the same ``now``."""
    window = window_for_key(month, tz)
    selected = window.select(expenses) if window else []
    totals = aggregator.category_totals(selected)
    top = top_category(totals)
    summary = evaluate_month(budgets, totals, month)

    return MonthlyReport(
        month=month,
        total_spent=aggregator.total(selected),
        transaction_count=len(selected),
        top_category=top[0] if top else None,
        overbudget_categories=list(
            dict.fromkeys(row.category for row in summary.budgets if row.status == STATUS_EXCEEDED)
        ),
    )
