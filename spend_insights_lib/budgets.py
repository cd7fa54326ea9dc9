from __future__ import annotations

import logging
from collections import Counter
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .aggregator import share
from .constants import (
    EXCEEDED_PERCENT,
    STATUS_EXCEEDED,
    STATUS_GOOD,
    STATUS_WARNING,
    WARNING_PERCENT,
)
from .models import Budget, BudgetProgress, BudgetSummary

logger = logging.getLogger(__name__)


def budgets_for_month(budgets: Iterable[Budget], month: str) -> List[Budget]:
    return [b for b in budgets if b.month == month]


def classify(percentage: Optional[Decimal]) -> str:
    # A zero limit has no ratio; any spend against it counts as exceeded.
    if percentage is None or percentage >= EXCEEDED_PERCENT:
        return STATUS_EXCEEDED
    if percentage >= WARNING_PERCENT:
        return STATUS_WARNING
    return STATUS_GOOD


def evaluate_budget(budget: Budget, category_totals: Dict[str, Decimal]) -> BudgetProgress:
    spent = category_totals.get(budget.category, Decimal("0"))
    percentage = share(spent, budget.amount) if budget.amount > 0 else None
    return BudgetProgress(
        budget_id=budget.id,
        category=budget.category,
        month=budget.month,
        amount=budget.amount,
        spent=spent,
        percentage=percentage,
        remaining=budget.amount - spent,
        status=classify(percentage),
    )


def evaluate_month(
    budgets: Iterable[Budget],
    category_totals: Dict[str, Decimal],
    month: str,
) -> BudgetSummary:
    """
    Join the month's budgets with that month's category totals.

    Each budget record becomes its own row, in input order. Duplicate records
    for one category are not merged; portfolio totals count every row.
    """
    month_budgets = budgets_for_month(budgets, month)

    duplicates = [cat for cat, count in Counter(b.category for b in month_budgets).items() if count > 1]
    if duplicates:
        logger.warning(f"Duplicate budgets for {month}: {', '.join(sorted(duplicates))}")

    rows = [evaluate_budget(b, category_totals) for b in month_budgets]
    total_budget = sum((row.amount for row in rows), Decimal("0"))
    total_spent = sum((row.spent for row in rows), Decimal("0"))

    return BudgetSummary(
        month=month,
        budgets=rows,
        total_budget=total_budget,
        total_spent=total_spent,
        total_remaining=total_budget - total_spent,
        alerts=[row for row in rows if row.status != STATUS_GOOD],
    )
