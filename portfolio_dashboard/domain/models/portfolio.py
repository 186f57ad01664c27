"""
DOMAIN MODELS — DERIVED PORTFOLIO VIEW

Transient structures recomputed on every cache update, filter change or
holdings change. Never persisted.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

ALL_SECTORS = "All Sectors"

PRICE_LIVE = "LIVE"
PRICE_UNAVAILABLE = "UNAVAILABLE"


@dataclass(frozen=True)
class DerivedRow:
    """
    Presentation record combining a holding with its live quote.
    """
    symbol: str
    stock_name: str
    purchase_price: float
    quantity: int
    exchange: str
    sector: str
    investment: float
    portfolio_percent: float
    cmp: float
    pe_ratio: Optional[float]
    latest_earnings: Optional[str]
    price_status: str

    @property
    def present_value(self) -> float:
        return self.cmp * self.quantity

    @property
    def gain_loss(self) -> float:
        return self.present_value - self.investment

    @property
    def gain_loss_pct(self) -> float:
        if self.investment <= 0:
            return 0.0
        return (self.gain_loss / self.investment) * 100.0


@dataclass(frozen=True)
class PortfolioView:
    """
    View model handed to the rendering layer.
    """
    sectors: Tuple[str, ...]
    active_filter: str
    total_investment: float
    rows: Tuple[DerivedRow, ...]

    @property
    def total_present_value(self) -> float:
        return sum(r.present_value for r in self.rows)

    @property
    def total_gain_loss(self) -> float:
        return self.total_present_value - self.total_investment

    @property
    def total_gain_loss_pct(self) -> float:
        if self.total_investment <= 0:
            return 0.0
        return (self.total_gain_loss / self.total_investment) * 100.0
