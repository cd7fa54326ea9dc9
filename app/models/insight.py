from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.budget import BudgetIn
from app.models.expense import ExpenseIn
from spend_insights_lib import (
    Budget,
    BudgetSummary,
    Expense,
    Insight,
    MonthlySummary,
    Suggestion,
)


class InsightRequest(BaseModel):
    """Snapshot of one user's records to analyze."""

    expenses: List[ExpenseIn] = Field(default_factory=list)
    budgets: List[BudgetIn] = Field(default_factory=list)
    now: Optional[datetime] = None  # defaults to server time

    def expense_records(self) -> List[Expense]:
        return [exp.to_record() for exp in self.expenses]

    def budget_records(self) -> List[Budget]:
        return [b.to_record() for b in self.budgets]


class ComparisonResponse(BaseModel):
    month: str
    insights: List[Insight]
    monthly_summaries: List[MonthlySummary]


class SummaryResponse(BaseModel):
    month: str
    budgets: BudgetSummary
    insights: List[Insight]
    suggestions: List[Suggestion]
    monthly_summaries: List[MonthlySummary]


class SuggestionsResponse(BaseModel):
    suggestions: List[Suggestion]
