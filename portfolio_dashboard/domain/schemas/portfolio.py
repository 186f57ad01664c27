from pydantic import BaseModel
from typing import Dict, List, Optional

from portfolio_dashboard.domain.models import DerivedRow, PortfolioView
from portfolio_dashboard.utils.formatters import (
    DEFAULT_CURRENCY,
    format_currency,
    format_label,
    format_percent,
    format_ratio,
)


class DerivedRowResponse(BaseModel):
    symbol: str
    stock_name: str
    purchase_price: float
    quantity: int
    exchange: str
    sector: str
    investment: float
    portfolio_percent: float
    cmp: float
    present_value: float
    gain_loss: float
    gain_loss_pct: float
    pe_ratio: Optional[float]
    latest_earnings: Optional[str]
    price_status: str
    display: Dict[str, str]

    @classmethod
    def from_row(cls, row: DerivedRow, currency: str = DEFAULT_CURRENCY) -> "DerivedRowResponse":
        return cls(
            symbol=row.symbol,
            stock_name=row.stock_name,
            purchase_price=row.purchase_price,
            quantity=row.quantity,
            exchange=row.exchange,
            sector=row.sector,
            investment=round(row.investment, 2),
            portfolio_percent=round(row.portfolio_percent, 2),
            cmp=round(row.cmp, 2),
            present_value=round(row.present_value, 2),
            gain_loss=round(row.gain_loss, 2),
            gain_loss_pct=round(row.gain_loss_pct, 2),
            pe_ratio=row.pe_ratio,
            latest_earnings=row.latest_earnings,
            price_status=row.price_status,
            display={
                "purchase_price": format_currency(row.purchase_price, currency),
                "investment": format_currency(row.investment, currency),
                "portfolio_percent": format_percent(row.portfolio_percent),
                "cmp": format_currency(row.cmp, currency),
                "present_value": format_currency(row.present_value, currency),
                "gain_loss": format_currency(row.gain_loss, currency),
                "pe_ratio": format_ratio(row.pe_ratio),
                "latest_earnings": format_label(row.latest_earnings),
            },
        )


class PortfolioViewResponse(BaseModel):
    sectors: List[str]
    active_filter: str
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_pct: float
    rows: List[DerivedRowResponse]

    @classmethod
    def from_view(cls, view: PortfolioView, currency: str = DEFAULT_CURRENCY) -> "PortfolioViewResponse":
        return cls(
            sectors=list(view.sectors),
            active_filter=view.active_filter,
            total_investment=round(view.total_investment, 2),
            total_present_value=round(view.total_present_value, 2),
            total_gain_loss=round(view.total_gain_loss, 2),
            total_gain_loss_pct=round(view.total_gain_loss_pct, 2),
            rows=[DerivedRowResponse.from_row(r, currency) for r in view.rows],
        )
