from portfolio_dashboard.domain.models.holding import Holding
from portfolio_dashboard.domain.models.portfolio import (
    ALL_SECTORS,
    PRICE_LIVE,
    PRICE_UNAVAILABLE,
    DerivedRow,
    PortfolioView,
)
from portfolio_dashboard.domain.models.quote import (
    NormalizedQuote,
    RawQuote,
    format_earnings_label,
    normalize_quote,
)

__all__ = [
    "ALL_SECTORS",
    "PRICE_LIVE",
    "PRICE_UNAVAILABLE",
    "DerivedRow",
    "Holding",
    "NormalizedQuote",
    "PortfolioView",
    "RawQuote",
    "format_earnings_label",
    "normalize_quote",
]
