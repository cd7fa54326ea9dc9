"""
Month-over-month comparison rules.

Each rule looks at the current and previous month windows on its own; every
rule that fires contributes one :class:`Insight` (the category rule may
contribute several), in rule order.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from . import aggregator
from .budgets import budgets_for_month
from .constants import (
    BUDGET_DISCIPLINE_RATIO,
    CATEGORY_SPIKE_PERCENT,
    DEFAULT_CURRENCY_SYMBOL,
    LARGE_EXPENSE_AMOUNT,
    PAYMENT_METHOD_SHARE_PERCENT,
    TOTAL_CHANGE_PERCENT,
)
from .formatting import money, percent
from .models import Budget, Expense, Insight, MonthlySummary
from .windows import Window

logger = logging.getLogger(__name__)

WEEKEND_DAYS = (5, 6)  # Saturday, Sunday


def change_percent(current: Decimal, previous: Decimal) -> Optional[Decimal]:
    if previous <= 0:
        return None
    return (current - previous) / previous * 100


def total_change(current: List[Expense], previous: List[Expense], symbol: str) -> List[Insight]:
    current_total = aggregator.total(current)
    previous_total = aggregator.total(previous)
    change = change_percent(current_total, previous_total)
    if change is None:
        return []

    difference = abs(current_total - previous_total)
    metrics = {
        "current_total": float(current_total),
        "previous_total": float(previous_total),
        "change_percent": float(change),
    }
    if change > TOTAL_CHANGE_PERCENT:
        return [
            Insight(
                kind="spending_increase",
                type="warning",
                title="Spending Increased",
                description=(
                    f"Your spending increased by {percent(change)}% compared to last month "
                    f"({money(difference, symbol)} more)."
                ),
                icon="trending-up",
                color="orange",
                metrics=metrics,
            )
        ]
    if change < -TOTAL_CHANGE_PERCENT:
        return [
            Insight(
                kind="spending_decrease",
                type="positive",
                title="Great Savings!",
                description=(
                    f"You saved {money(difference, symbol)} this month compared to last month "
                    f"({percent(abs(change))}% decrease)."
                ),
                icon="trending-down",
                color="green",
                metrics=metrics,
            )
        ]
    return []


def category_spikes(current: List[Expense], previous: List[Expense]) -> List[Insight]:
    previous_totals = aggregator.category_totals(previous)
    insights = []
    for category, amount in aggregator.category_totals(current).items():
        change = change_percent(amount, previous_totals.get(category, Decimal("0")))
        if change is None or change <= CATEGORY_SPIKE_PERCENT:
            continue
        insights.append(
            Insight(
                kind="category_spike",
                type="info",
                title=f"{category} Spending Up",
                description=f"Your {category} expenses increased by {percent(change)}% this month.",
                icon="shopping-cart",
                color="blue",
                category=category,
                metrics={
                    "current_total": float(amount),
                    "previous_total": float(previous_totals[category]),
                    "change_percent": float(change),
                },
            )
        )
    return insights


def payment_method_concentration(current: List[Expense]) -> List[Insight]:
    current_total = aggregator.total(current)
    ranked = aggregator.top_n(aggregator.payment_method_totals(current), 1)
    if not ranked or current_total <= 0:
        return []

    method, amount = ranked[0]
    method_share = aggregator.share(amount, current_total)
    if method_share <= PAYMENT_METHOD_SHARE_PERCENT:
        return []
    return [
        Insight(
            kind="payment_method_preference",
            type="info",
            title="Payment Method Preference",
            description=f"You used {method} for {percent(method_share)}% of your expenses this month.",
            icon="credit-card",
            color="purple",
            metrics={"payment_method": method, "amount": float(amount), "percentage": float(method_share)},
        )
    ]


def weekend_pattern(current: List[Expense], symbol: str) -> List[Insight]:
    weekend = [exp for exp in current if exp.date.weekday() in WEEKEND_DAYS]
    weekday = [exp for exp in current if exp.date.weekday() not in WEEKEND_DAYS]
    weekend_total = aggregator.total(weekend)
    weekday_total = aggregator.total(weekday)

    if not weekend or weekend_total <= weekday_total:
        return []
    return [
        Insight(
            kind="weekend_spending",
            type="info",
            title="Weekend Spending Pattern",
            description=(
                f"You tend to spend more on weekends ({money(weekend_total, symbol)}) "
                f"than weekdays ({money(weekday_total, symbol)})."
            ),
            icon="calendar",
            color="indigo",
            metrics={"weekend_total": float(weekend_total), "weekday_total": float(weekday_total)},
        )
    ]


def large_expenses(current: List[Expense], symbol: str) -> List[Insight]:
    large = [exp for exp in current if exp.amount > LARGE_EXPENSE_AMOUNT]
    if not large:
        return []

    large_total = aggregator.total(large)
    large_share = aggregator.share(large_total, aggregator.total(current))
    return [
        Insight(
            kind="large_expenses",
            type="info",
            title="Large Expenses",
            description=(
                f"You had {len(large)} large expenses (>{money(LARGE_EXPENSE_AMOUNT, symbol)}) this month, "
                f"totaling {money(large_total, symbol)} ({percent(large_share)}% of total spending)."
            ),
            icon="dollar-sign",
            color="red",
            metrics={"count": len(large), "total": float(large_total), "percentage": float(large_share)},
        )
    ]


def budget_discipline(
    budgets: Iterable[Budget],
    category_totals: Dict[str, Decimal],
    month: str,
) -> List[Insight]:
    performing = [
        b
        for b in budgets_for_month(budgets, month)
        # a zero limit is already exceeded
        if b.amount > 0
        and category_totals.get(b.category, Decimal("0")) <= b.amount * BUDGET_DISCIPLINE_RATIO
    ]
    if not performing:
        return []
    return [
        Insight(
            kind="budget_performance",
            type="positive",
            title="Budget Performance",
            description=(
                f"You're staying within budget for {len(performing)} categories. "
                "Great financial discipline!"
            ),
            icon="target",
            color="green",
            metrics={"count": len(performing)},
        )
    ]


def compare_months(
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    current: Window,
    previous: Window,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> List[Insight]:
    expenses = list(expenses)
    current_expenses = current.select(expenses)
    previous_expenses = previous.select(expenses)

    insights: List[Insight] = []
    insights += total_change(current_expenses, previous_expenses, currency_symbol)
    insights += category_spikes(current_expenses, previous_expenses)
    insights += payment_method_concentration(current_expenses)
    insights += weekend_pattern(current_expenses, currency_symbol)
    insights += large_expenses(current_expenses, currency_symbol)
    insights += budget_discipline(budgets, aggregator.category_totals(current_expenses), current.key)

    logger.debug(
        f"Compared {current.key} ({len(current_expenses)} expenses) with "
        f"{previous.key} ({len(previous_expenses)} expenses): {len(insights)} insights"
    )
    return insights


def monthly_summaries(expenses: Iterable[Expense], current: Window, previous: Window) -> List[MonthlySummary]:
    expenses = list(expenses)
    summaries = []
    for window in (current, previous):
        selected = window.select(expenses)
        summaries.append(
            MonthlySummary(month=window.key, total=aggregator.total(selected), transaction_count=len(selected))
        )
    return summaries
