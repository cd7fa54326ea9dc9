from decimal import ROUND_HALF_UP, Decimal

from .constants import DEFAULT_CURRENCY_SYMBOL


def money(value: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL, places: int = 2) -> str:
    """Grouped amount with the currency symbol, trailing zero cents dropped."""
    quantum = Decimal(1).scaleb(-places)
    text = f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):,}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{symbol}{text}"


def percent(value: Decimal, places: int = 1) -> str:
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)}"
