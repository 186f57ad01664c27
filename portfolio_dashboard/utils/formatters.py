"""Display formatting for portfolio values."""

from typing import Optional

MISSING = "-"
DEFAULT_CURRENCY = "₹"


def format_currency(value: float, currency: str = DEFAULT_CURRENCY) -> str:
    return f"{currency}{value:.2f}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_ratio(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    return f"{value:.2f}"


def format_label(value: Optional[str]) -> str:
    return value if value else MISSING
