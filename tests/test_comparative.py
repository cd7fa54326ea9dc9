from datetime import datetime

from spend_insights_lib.comparative import compare_months, monthly_summaries
from spend_insights_lib.windows import month_window
from tests.conftest import make_budget, make_expense

NOW = datetime(2024, 3, 20, 12, 0)
CURRENT = month_window(NOW)
PREVIOUS = month_window(NOW, 1)


def kinds(insights):
    return [i.kind for i in insights]


def by_kind(insights, kind):
    return [i for i in insights if i.kind == kind]


def test_spending_increase_above_threshold():
    expenses = [make_expense(1000, month=2, day=5), make_expense(1200, day=4)]

    insights = compare_months(expenses, [], CURRENT, PREVIOUS)

    assert kinds(insights) == ["spending_increase", "payment_method_preference"]
    increase = insights[0]
    assert increase.type == "warning"
    assert increase.title == "Spending Increased"
    assert increase.description == (
        "Your spending increased by 20.0% compared to last month (₹200 more)."
    )
    assert increase.metrics["change_percent"] == 20.0


def test_small_change_is_ignored():
    expenses = [make_expense(1000, month=2, day=5), make_expense(1050, day=4)]
    insights = compare_months(expenses, [], CURRENT, PREVIOUS)
    assert by_kind(insights, "spending_increase") == []
    assert by_kind(insights, "spending_decrease") == []


def test_spending_decrease_is_positive():
    expenses = [make_expense(2000, month=2, day=5), make_expense(1000, day=4)]

    decrease = by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "spending_decrease")

    assert len(decrease) == 1
    assert decrease[0].type == "positive"
    assert decrease[0].description == (
        "You saved ₹1,000 this month compared to last month (50.0% decrease)."
    )


def test_no_total_change_without_previous_spend():
    insights = compare_months([make_expense(500, day=4)], [], CURRENT, PREVIOUS)
    assert "spending_increase" not in kinds(insights)


def test_category_spikes_need_prior_spend():
    expenses = [
        make_expense(100, "Food", month=2, day=5),
        make_expense(1000, "Rent", month=2, day=6),
        make_expense(126, "Food", day=4),
        make_expense(1250, "Rent", day=5),
        make_expense(400, "Shopping", day=6),
    ]

    spikes = by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "category_spike")

    assert [s.category for s in spikes] == ["Food"]
    assert spikes[0].title == "Food Spending Up"
    assert spikes[0].description == "Your Food expenses increased by 26.0% this month."


def test_every_spiking_category_is_reported():
    categories = ["Food", "Rent", "Shopping", "Travel"]
    expenses = [make_expense(100, c, month=2, day=5) for c in categories]
    expenses += [make_expense(200, c, day=4) for c in categories]

    spikes = by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "category_spike")

    assert [s.category for s in spikes] == categories


def test_payment_method_concentration():
    expenses = [make_expense(510, method="UPI"), make_expense(490, method="Cash")]
    found = by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "payment_method_preference")
    assert len(found) == 1
    assert found[0].description == "You used UPI for 51.0% of your expenses this month."


def test_even_payment_split_does_not_fire():
    expenses = [make_expense(500, method="UPI"), make_expense(500, method="Cash")]
    assert by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "payment_method_preference") == []


def test_zero_spend_month_skips_payment_rule():
    assert by_kind(compare_months([make_expense(0)], [], CURRENT, PREVIOUS), "payment_method_preference") == []


def test_weekend_pattern():
    saturday, monday = 2, 4
    expenses = [make_expense(300, day=saturday), make_expense(100, day=monday)]

    found = by_kind(compare_months(expenses, [], CURRENT, PREVIOUS), "weekend_spending")

    assert len(found) == 1
    assert found[0].description == "You tend to spend more on weekends (₹300) than weekdays (₹100)."


def test_weekend_pattern_needs_more_weekend_spend():
    balanced = [make_expense(100, day=3), make_expense(100, day=4)]
    weekdays_only = [make_expense(100, day=4)]
    assert by_kind(compare_months(balanced, [], CURRENT, PREVIOUS), "weekend_spending") == []
    assert by_kind(compare_months(weekdays_only, [], CURRENT, PREVIOUS), "weekend_spending") == []


def test_single_large_expense():
    found = by_kind(compare_months([make_expense(6000)], [], CURRENT, PREVIOUS), "large_expenses")

    assert len(found) == 1
    assert found[0].metrics == {"count": 1, "total": 6000.0, "percentage": 100.0}
    assert found[0].description == (
        "You had 1 large expenses (>₹5,000) this month, totaling ₹6,000 (100.0% of total spending)."
    )


def test_threshold_amount_is_not_large():
    assert by_kind(compare_months([make_expense(5000)], [], CURRENT, PREVIOUS), "large_expenses") == []


def test_budget_discipline_counts_budgets_at_or_under_80_percent():
    expenses = [make_expense(800, "Food"), make_expense(900, "Rent")]
    budgets = [
        make_budget(1000, "Food"),
        make_budget(1000, "Rent"),
        make_budget(500, "Travel"),
        make_budget(500, "Education", month="2024-02"),
    ]

    found = by_kind(compare_months(expenses, budgets, CURRENT, PREVIOUS), "budget_performance")

    assert found[0].metrics == {"count": 2}
    assert found[0].description == (
        "You're staying within budget for 2 categories. Great financial discipline!"
    )


def test_rules_fire_in_fixed_order():
    expenses = [
        make_expense(1000, "Food", month=2, day=5),
        make_expense(2000, "Food", day=4),
        make_expense(6000, "Shopping", day=9),
    ]
    budgets = [make_budget(500, "Travel")]

    insights = compare_months(expenses, budgets, CURRENT, PREVIOUS)

    assert kinds(insights) == [
        "spending_increase",
        "category_spike",
        "payment_method_preference",
        "weekend_spending",
        "large_expenses",
        "budget_performance",
    ]


def test_empty_history():
    assert compare_months([], [], CURRENT, PREVIOUS) == []


def test_comparison_is_repeatable():
    expenses = [make_expense(1000, month=2, day=5), make_expense(3000, day=2)]
    assert compare_months(expenses, [], CURRENT, PREVIOUS) == compare_months(expenses, [], CURRENT, PREVIOUS)


def test_custom_currency_symbol():
    expenses = [make_expense(1000, month=2, day=5), make_expense(1500, day=4)]
    insight = compare_months(expenses, [], CURRENT, PREVIOUS, currency_symbol="$")[0]
    assert "($500 more)" in insight.description


def test_monthly_summaries():
    expenses = [make_expense(1000, month=2, day=5), make_expense(1500, day=4), make_expense(20, day=5)]
    current, previous = monthly_summaries(expenses, CURRENT, PREVIOUS)
    assert (current.month, current.total, current.transaction_count) == ("2024-03", 1520, 2)
    assert (previous.month, previous.total, previous.transaction_count) == ("2024-02", 1000, 1)


def test_zero_limit_budget_is_not_counted_as_disciplined():
    assert by_kind(compare_months([], [make_budget(0, "Food")], CURRENT, PREVIOUS), "budget_performance") == []

    budgets = [make_budget(0, "Food"), make_budget(1000, "Rent")]
    found = by_kind(compare_months([], budgets, CURRENT, PREVIOUS), "budget_performance")
    assert found[0].metrics == {"count": 1}
