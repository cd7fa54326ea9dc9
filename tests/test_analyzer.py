from datetime import datetime, timedelta, timezone

from spend_insights_lib import FinanceAnalyzer
from tests.conftest import make_budget, make_expense

NOW = datetime(2024, 3, 20, 12, 0)

sample_expenses = [
    make_expense(250, "Food", day=1),
    make_expense(1000, "Rent", day=2, method="Net Banking"),
    make_expense(150, "Food", day=4),
    make_expense(1200, "Shopping", day=5, method="Credit Card"),
    make_expense(1600, "Rent", month=2, day=2, method="Net Banking"),
]

sample_budgets = [
    make_budget(300, "Food"),
    make_budget(900, "Rent"),
    make_budget(5000, "Shopping"),
]


def test_budget_summary_defaults_to_current_month():
    analyzer = FinanceAnalyzer()
    summary = analyzer.budget_summary(sample_expenses, sample_budgets, now=NOW)
    assert summary.month == "2024-03"
    assert [(row.category, row.status) for row in summary.budgets] == [
        ("Food", "exceeded"),
        ("Rent", "exceeded"),
        ("Shopping", "good"),
    ]


def test_budget_summary_for_explicit_month():
    analyzer = FinanceAnalyzer()
    summary = analyzer.budget_summary(sample_expenses, [make_budget(2000, "Rent", month="2024-02")], month="2024-02")
    assert summary.budgets[0].spent == 1600
    assert summary.budgets[0].status == "warning"


def test_summarize():
    analyzer = FinanceAnalyzer()
    summary = analyzer.summarize(sample_expenses, sample_budgets, now=NOW, user_id="u-42")

    assert summary["month"] == "2024-03"
    assert summary["budgets"].total_budget == 6200
    assert [i.kind for i in summary["insights"]] == ["spending_increase", "budget_performance"]
    assert [s.severity for s in summary["suggestions"]] == ["high", "high", "low"]
    assert all(s.user_id == "u-42" for s in summary["suggestions"])
    assert [m.total for m in summary["monthly_summaries"]] == [2600, 1600]


def test_summarize_is_repeatable():
    analyzer = FinanceAnalyzer()
    first = analyzer.summarize(sample_expenses, sample_budgets, now=NOW)
    second = analyzer.summarize(sample_expenses, sample_budgets, now=NOW)
    assert first == second


def test_currency_symbol_is_used_in_messages():
    analyzer = FinanceAnalyzer(currency_symbol="$")
    suggestions = analyzer.suggestions(sample_expenses, sample_budgets, now=NOW)
    assert suggestions[0].suggestion.startswith("You've exceeded your Food budget by $100.")


def test_empty_collections():
    analyzer = FinanceAnalyzer()
    summary = analyzer.summarize([], [], now=NOW)
    assert summary["budgets"].budgets == []
    assert summary["insights"] == []
    assert summary["suggestions"] == []
    assert analyzer.dashboard([], [], now=NOW).total_spent == 0
    assert analyzer.analytics([], now=NOW).total_spent == 0
    assert analyzer.monthly_report([], [], "2024-03").overbudget_categories == []


def test_aware_now_puts_every_view_in_the_same_month():
    now = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
    ist = timezone(timedelta(hours=5, minutes=30))
    # 2024-02-29 20:30 UTC
    expense = make_expense(5000, "Food").model_copy(update={"date": datetime(2024, 3, 1, 2, 0, tzinfo=ist)})
    budgets = [make_budget(4000, "Food")]
    analyzer = FinanceAnalyzer()

    summary = analyzer.summarize([expense], budgets, now=now)

    row = summary["budgets"].budgets[0]
    assert (row.spent, row.status) == (0, "good")
    assert [s.severity for s in summary["suggestions"]] == []
    assert "spending_decrease" in [i.kind for i in summary["insights"]]
    assert [m.total for m in summary["monthly_summaries"]] == [0, 5000]

    report = analyzer.monthly_report([expense], budgets, "2024-03", now=now)
    assert report.total_spent == 0
    assert analyzer.monthly_report([expense], budgets, "2024-02", now=now).total_spent == 5000


def test_summary_parts_agree_with_each_other():
    expenses = [
        make_expense(400, "Food", day=1),
        make_expense(1000, "Rent", day=2, method="Net Banking"),
        make_expense(1200, "Shopping", day=5, method="Credit Card"),
    ]
    budgets = [
        make_budget(300, "Food"),
        make_budget(1100, "Rent"),
        make_budget(5000, "Shopping"),
        make_budget(0, "Travel"),
    ]

    summary = FinanceAnalyzer().summarize(expenses, budgets, now=NOW)

    rows = summary["budgets"].budgets
    suggestions = summary["suggestions"]
    exceeded = [r.category for r in rows if r.status == "exceeded"]
    warning = [r.category for r in rows if r.status == "warning"]
    assert exceeded == ["Food", "Travel"]
    assert warning == ["Rent"]
    assert [s.category for s in suggestions if s.severity == "high"] == exceeded
    assert [s.category for s in suggestions if s.severity == "medium"] == warning

    disciplined = [r for r in rows if r.percentage is not None and r.percentage <= 80]
    performance = [i for i in summary["insights"] if i.kind == "budget_performance"]
    assert performance[0].metrics == {"count": len(disciplined)}
    assert len(disciplined) == 1
