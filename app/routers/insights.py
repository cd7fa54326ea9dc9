"""
Insights Router
Runs the analytics engine over a snapshot of one user's expenses and budgets.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, TypeVar

from fastapi import APIRouter, HTTPException, Query

from app.core.config import settings
from app.models.insight import ComparisonResponse, InsightRequest, SuggestionsResponse, SummaryResponse
from spend_insights_lib import (
    AnalyticsReport,
    BudgetSummary,
    DashboardSummary,
    FinanceAnalyzer,
    MonthlyReport,
)
from spend_insights_lib.comparative import monthly_summaries
from spend_insights_lib.windows import month_window, parse_month_key

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(currency_symbol=settings.CURRENCY_SYMBOL)

ANALYTICS_PERIODS = (6, 12)

T = TypeVar("T")


def _run(action: str, compute: Callable[[], T]) -> T:
    try:
        return compute()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing {action}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error computing {action}")


def _check_month(month: str) -> str:
    if parse_month_key(month) is None:
        raise HTTPException(status_code=400, detail="month must follow YYYY-MM format. Example: 2025-11")
    return month


@router.post("/budgets", response_model=BudgetSummary)
def budget_progress(request: InsightRequest, month: Optional[str] = Query(None)):
    """
    Budget vs actual for ``month`` (defaults to the month of ``now``).
    """
    if month is not None:
        _check_month(month)
    return _run(
        "budget summary",
        lambda: finance_analyzer.budget_summary(
            request.expense_records(), request.budget_records(), month=month, now=request.now
        ),
    )


@router.post("/comparison", response_model=ComparisonResponse)
def month_comparison(request: InsightRequest):
    def compute():
        now = request.now or datetime.now()
        expenses = request.expense_records()
        insights = finance_analyzer.insights(expenses, request.budget_records(), now)
        current = month_window(now)
        return {
            "month": current.key,
            "insights": insights,
            "monthly_summaries": monthly_summaries(expenses, current, month_window(current.start, 1)),
        }

    return _run("month comparison", compute)


@router.post("/suggestions", response_model=SuggestionsResponse)
def smart_suggestions(request: InsightRequest):
    suggestions = _run(
        "suggestions",
        lambda: finance_analyzer.suggestions(request.expense_records(), request.budget_records(), request.now),
    )
    return {"suggestions": suggestions}


@router.post("/summary", response_model=SummaryResponse)
def full_summary(request: InsightRequest):
    return _run(
        "summary",
        lambda: finance_analyzer.summarize(request.expense_records(), request.budget_records(), request.now),
    )


@router.post("/dashboard", response_model=DashboardSummary)
def dashboard(request: InsightRequest):
    return _run(
        "dashboard",
        lambda: finance_analyzer.dashboard(request.expense_records(), request.budget_records(), request.now),
    )


@router.post("/analytics", response_model=AnalyticsReport)
def analytics(request: InsightRequest, months: int = Query(settings.DEFAULT_ANALYTICS_MONTHS)):
    if months not in ANALYTICS_PERIODS:
        raise HTTPException(status_code=400, detail="months must be 6 or 12")
    return _run(
        "analytics",
        lambda: finance_analyzer.analytics(request.expense_records(), months=months, now=request.now),
    )


@router.post("/report/{month}", response_model=MonthlyReport)
def monthly_report(month: str, request: InsightRequest):
    """
    month must follow YYYY-MM format. Example: 2025-11
    """
    _check_month(month)
    logger.info(f"Building monthly report for {month} from {len(request.expenses)} expenses")
    return _run(
        "monthly report",
        lambda: finance_analyzer.monthly_report(
            request.expense_records(), request.budget_records(), month, now=request.now
        ),
    )
