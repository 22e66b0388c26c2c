from decimal import Decimal, InvalidOperation
from typing import Any, Optional

DEFAULT_SYMBOL = "₹"


def fmt_currency(value: Optional[Any], symbol: str = DEFAULT_SYMBOL) -> str:
    """
    Canonical currency formatter for ALL reports (lakh / crore scale).
    """
    if value is None:
        return "-"

    try:
        value = Decimal(str(value))
    except InvalidOperation:
        return "-"
    if not value.is_finite():
        return "-"

    if abs(value) >= 10_000_000:
        return f"{symbol}{value / 10_000_000:.2f} Cr"
    if abs(value) >= 100_000:
        return f"{symbol}{value / 100_000:.2f} L"
    return f"{symbol}{value:,.0f}"


def fmt_count(value: Optional[Any]) -> str:
    if value is None:
        return "-"
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return "-"


def fmt_label(key: str) -> str:
    return key.replace("_", " ").title()
