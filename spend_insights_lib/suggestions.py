from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from . import aggregator
from .budgets import budgets_for_month, evaluate_budget
from .constants import (
    DEFAULT_CURRENCY_SYMBOL,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    STATUS_EXCEEDED,
    STATUS_WARNING,
)
from .formatting import money, percent
from .models import Budget, Expense, Suggestion
from .windows import month_window

logger = logging.getLogger(__name__)

SEVERITY_RANK = {SEVERITY_LOW: 0, SEVERITY_MEDIUM: 1, SEVERITY_HIGH: 2}


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


class _IdFactory:
    """Deterministic ids from the computation instant, rule and category."""

    def __init__(self, now: datetime) -> None:
        self._epoch = int(now.timestamp())
        self._seen: Dict[str, int] = {}

    def __call__(self, rule: str, category: str) -> str:
        base = f"{self._epoch}-{rule}-{_slug(category)}"
        self._seen[base] = self._seen.get(base, 0) + 1
        count = self._seen[base]
        return base if count == 1 else f"{base}-{count}"


def compute_suggestions(
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    now: datetime,
    user_id: str = "",
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> List[Suggestion]:
    """
    Rebuild the full suggestion list for the month containing ``now``.

    Budget suggestions come first in budget order (exceeded -> high,
    warning -> medium), followed by one low-severity note on the top category.
    """
    window = month_window(now)
    totals = aggregator.category_totals(window.select(expenses))
    make_id = _IdFactory(now)
    suggestions: List[Suggestion] = []

    for budget in budgets_for_month(budgets, window.key):
        progress = evaluate_budget(budget, totals)
        if progress.status == STATUS_EXCEEDED:
            overage = progress.spent - progress.amount
            message = (
                f"You've exceeded your {budget.category} budget by {money(overage, currency_symbol, 0)}. "
                "Consider reducing expenses in this category."
            )
            severity, rule = SEVERITY_HIGH, "budget-exceeded"
        elif progress.status == STATUS_WARNING:
            message = (
                f"You're at {percent(progress.percentage, 0)}% of your {budget.category} budget. "
                "Try to limit further spending."
            )
            severity, rule = SEVERITY_MEDIUM, "budget-warning"
        else:
            continue

        suggestions.append(
            Suggestion(
                id=make_id(rule, budget.category),
                user_id=user_id,
                suggestion=message,
                category=budget.category,
                severity=severity,
                rule=rule,
                created_at=now,
            )
        )

    top = top_category(totals)
    if top is not None:
        category, amount = top
        suggestions.append(
            Suggestion(
                id=make_id("highest-category", category),
                user_id=user_id,
                suggestion=(
                    f"{category} is your highest spending category this month at "
                    f"{money(amount, currency_symbol, 0)}. Consider if this aligns with your financial goals."
                ),
                category=category,
                severity=SEVERITY_LOW,
                rule="highest-category",
                created_at=now,
            )
        )

    logger.debug(f"Generated {len(suggestions)} suggestions for {window.key}")
    return suggestions


def top_category(totals) -> Optional[tuple]:
    ranked = aggregator.top_n(totals, 1)
    if not ranked or ranked[0][1] <= 0:
        return None
    return ranked[0]


def by_severity(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Highest severity first; order within a severity is kept."""
    return sorted(suggestions, key=lambda s: -SEVERITY_RANK.get(s.severity, 0))
