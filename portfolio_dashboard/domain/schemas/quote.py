from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from portfolio_dashboard.domain.models import RawQuote


class RawQuoteSchema(BaseModel):
    """Wire shape of one upstream quote record."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    cmp: Optional[float] = None
    pe_ratio: Optional[float] = Field(default=None, alias="peRatio")
    earnings_timestamp: Optional[int] = Field(default=None, alias="earningsTimestamp")

    def to_domain(self) -> RawQuote:
        return RawQuote(
            symbol=self.symbol,
            cmp=self.cmp,
            pe_ratio=self.pe_ratio,
            earnings_timestamp=self.earnings_timestamp,
        )

    @classmethod
    def from_domain(cls, quote: RawQuote) -> "RawQuoteSchema":
        return cls(
            symbol=quote.symbol,
            cmp=quote.cmp,
            pe_ratio=quote.pe_ratio,
            earnings_timestamp=quote.earnings_timestamp,
        )


class RealTimePriceRequest(BaseModel):
    symbols: List[str] = Field(..., min_length=1)
