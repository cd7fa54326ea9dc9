from decimal import Decimal

EXPENSE_CATEGORIES = (
    "Food",
    "Rent",
    "Shopping",
    "Transportation",
    "Entertainment",
    "Healthcare",
    "Education",
    "Utilities",
    "Travel",
    "Others",
)

PAYMENT_METHODS = (
    "UPI",
    "Credit Card",
    "Debit Card",
    "Cash",
    "Net Banking",
    "Wallet",
)

# Budget status thresholds (percent of limit)
WARNING_PERCENT = Decimal("80")
EXCEEDED_PERCENT = Decimal("100")

# Comparative analysis thresholds
TOTAL_CHANGE_PERCENT = Decimal("10")
CATEGORY_SPIKE_PERCENT = Decimal("25")
PAYMENT_METHOD_SHARE_PERCENT = Decimal("50")
LARGE_EXPENSE_AMOUNT = Decimal("5000")
BUDGET_DISCIPLINE_RATIO = Decimal("0.8")

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_EXCEEDED = "exceeded"

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

DEFAULT_CURRENCY_SYMBOL = "₹"
