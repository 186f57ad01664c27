"""
DERIVATION ENGINE
Combine static holdings + live quotes + sector filter → derived rows

RESPONSIBILITIES:
- Restrict holdings to the active sector
- Compute total investment over the filtered set only
- Compute per-holding investment, share, value and gain/loss

RULES:
❌ No I/O, no fetching
❌ No re-sorting of rows
✅ Portfolio share is 0% when total investment is 0
✅ Missing live quote → cmp 0, ratio/earnings unavailable
"""

from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from portfolio_dashboard.domain.models import (
    PRICE_LIVE,
    PRICE_UNAVAILABLE,
    DerivedRow,
    Holding,
    NormalizedQuote,
    PortfolioView,
)
from portfolio_dashboard.domain.services.sector_filter import apply_filter, distinct_sectors


class QuoteLookup(Protocol):
    def get(self, symbol: str) -> Optional[NormalizedQuote]:
        ...


def total_investment(holdings: Iterable[Holding]) -> float:
    return sum(h.investment for h in holdings)


def portfolio_share(investment: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return (investment / total) * 100.0


def derive_row(holding: Holding, quote: Optional[NormalizedQuote], total: float) -> DerivedRow:
    investment = holding.investment
    if quote is None:
        cmp, pe_ratio, latest_earnings, status = 0.0, None, None, PRICE_UNAVAILABLE
    else:
        cmp, pe_ratio, latest_earnings, status = (
            quote.cmp,
            quote.pe_ratio,
            quote.latest_earnings,
            PRICE_LIVE,
        )

    return DerivedRow(
        symbol=holding.symbol,
        stock_name=holding.stock_name,
        purchase_price=holding.purchase_price,
        quantity=holding.quantity,
        exchange=holding.exchange,
        sector=holding.sector,
        investment=investment,
        portfolio_percent=portfolio_share(investment, total),
        cmp=cmp,
        pe_ratio=pe_ratio,
        latest_earnings=latest_earnings,
        price_status=status,
    )


def derive(
    holdings: Sequence[Holding],
    live_cache: QuoteLookup,
    active_filter: str,
) -> Tuple[float, List[DerivedRow]]:
    """
    Derive rows for the filtered holdings.

    Args:
        holdings: Static holdings, in display order
        live_cache: Anything exposing get(symbol) -> NormalizedQuote | None
        active_filter: Sector name or the "All Sectors" sentinel

    Returns:
        Tuple of (total investment of the filtered set, derived rows)
    """
    filtered = apply_filter(holdings, active_filter)
    total = total_investment(filtered)
    rows = [derive_row(h, live_cache.get(h.symbol), total) for h in filtered]
    return total, rows


def build_view(
    holdings: Sequence[Holding],
    live_cache: QuoteLookup,
    active_filter: str,
) -> PortfolioView:
    total, rows = derive(holdings, live_cache, active_filter)
    return PortfolioView(
        sectors=tuple(distinct_sectors(holdings)),
        active_filter=active_filter,
        total_investment=total,
        rows=tuple(rows),
    )
