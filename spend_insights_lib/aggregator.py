from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .models import Expense

KeySelector = Callable[[Expense], str]


def by_category(exp: Expense) -> str:
    return exp.category


def by_payment_method(exp: Expense) -> str:
    return exp.payment_method


def by_day(exp: Expense) -> str:
    return exp.date.date().isoformat()


def group_totals(expenses: Iterable[Expense], key: KeySelector) -> Dict[str, Decimal]:
    """
    Sum expense amounts per key. Keys keep first-seen order and none is dropped,
    even when its total is zero.
    """
    totals: Dict[str, Decimal] = {}
    for exp in expenses:
        group = key(exp)
        totals[group] = totals.get(group, Decimal("0")) + exp.amount
    return totals


def category_totals(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    return group_totals(expenses, by_category)


def payment_method_totals(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    return group_totals(expenses, by_payment_method)


def daily_totals(expenses: Iterable[Expense]) -> Dict[str, Decimal]:
    return group_totals(expenses, by_day)


def total(expenses: Iterable[Expense]) -> Decimal:
    return sum((exp.amount for exp in expenses), Decimal("0"))


def top_n(totals: Dict[str, Decimal], n: Optional[int] = None) -> List[Tuple[str, Decimal]]:
    """Entries ranked by amount descending; equal amounts fall back to key order."""
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return ranked if n is None else ranked[:n]


def share(part: Decimal, whole: Decimal) -> Optional[Decimal]:
    """``part`` as a percentage of ``whole``; None when ``whole`` is zero."""
    if not whole:
        return None
    return part / whole * 100
