from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Decimals go out as JSON numbers, the same way stored amounts are handed back as int/float.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Expense(BaseModel):
    """A single logged expense as handed over by the storage layer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str = ""
    amount: Money
    category: str
    date: datetime
    payment_method: str
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Budget(BaseModel):
    """Monthly spending limit for one category."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str = ""
    category: str
    amount: Money
    month: str  # YYYY-MM
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Suggestion(BaseModel):
    id: str
    user_id: str = ""
    suggestion: str
    category: Optional[str] = None
    severity: str
    rule: str
    created_at: datetime


class Insight(BaseModel):
    kind: str
    type: str
    title: str
    description: str
    icon: str
    color: str
    category: Optional[str] = None
    metrics: Dict[str, Any] = Field(default_factory=dict)


class BudgetProgress(BaseModel):
    budget_id: str
    category: str
    month: str
    amount: Money
    spent: Money
    # None when the limit is zero and the ratio is undefined
    percentage: Optional[Money] = None
    remaining: Money
    status: str


class BudgetSummary(BaseModel):
    month: str
    budgets: List[BudgetProgress] = Field(default_factory=list)
    total_budget: Money = Decimal("0")
    total_spent: Money = Decimal("0")
    total_remaining: Money = Decimal("0")
    alerts: List[BudgetProgress] = Field(default_factory=list)


class MonthlySummary(BaseModel):
    month: str
    total: Money
    transaction_count: int


class CategoryShare(BaseModel):
    category: str
    amount: Money
    percentage: Money


class DailyTotal(BaseModel):
    day: str  # YYYY-MM-DD
    amount: Money


class DashboardSummary(BaseModel):
    month: str
    total_spent: Money
    transaction_count: int
    top_category: Optional[Tuple[str, Money]] = None
    top_payment_methods: List[Tuple[str, Money]] = Field(default_factory=list)
    categories: List[CategoryShare] = Field(default_factory=list)
    last_7_days: List[DailyTotal] = Field(default_factory=list)
    budget_alerts: List[BudgetProgress] = Field(default_factory=list)


class MonthTrend(BaseModel):
    month: str
    total: Money
    category_totals: Dict[str, Money] = Field(default_factory=dict)
    # None for the first month and after a month with no spend
    growth: Optional[Money] = None


class AnalyticsReport(BaseModel):
    months: List[MonthTrend] = Field(default_factory=list)
    categories: List[CategoryShare] = Field(default_factory=list)
    total_spent: Money = Decimal("0")
    average_monthly: Money = Decimal("0")
    monthly_growth: Optional[Money] = None


class MonthlyReport(BaseModel):
    month: str
    total_spent: Money
    transaction_count: int
    top_category: Optional[str] = None
    overbudget_categories: List[str] = Field(default_factory=list)
