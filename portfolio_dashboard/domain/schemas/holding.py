from pydantic import BaseModel, ConfigDict, Field

from portfolio_dashboard.domain.models import Holding


class HoldingSchema(BaseModel):
    """Holdings file record. Accepts camelCase keys as well as snake_case."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    symbol: str = Field(..., min_length=1)
    stock_name: str = Field(..., alias="stockName")
    purchase_price: float = Field(..., ge=0, alias="purchasePrice")
    quantity: int = Field(..., ge=0)
    exchange: str
    sector: str

    def to_domain(self) -> Holding:
        return Holding(
            symbol=self.symbol,
            stock_name=self.stock_name,
            purchase_price=self.purchase_price,
            quantity=self.quantity,
            exchange=self.exchange,
            sector=self.sector,
        )
