"""
Market Data routes - batched real-time quotes.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request

from portfolio_dashboard.domain.schemas.quote import RawQuoteSchema, RealTimePriceRequest
from portfolio_dashboard.infrastructure.market_data.provider_factory import get_quote_client
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed, QuoteClient

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_quote_client(request: Request) -> QuoteClient:
    client = getattr(request.app.state, "quote_client", None)
    return client if client is not None else get_quote_client()


@router.post("/real-time-price", response_model=List[RawQuoteSchema], response_model_by_alias=True)
async def real_time_price(request: Request, payload: RealTimePriceRequest):
    """Live quote per recognised symbol; unknown symbols are omitted."""
    client = _get_quote_client(request)
    try:
        quotes = await client.fetch_quotes(set(payload.symbols))
    except FetchFailed as exc:
        logger.warning("Real-time price request failed: %s", exc)
        raise HTTPException(status_code=502, detail="Quote source unavailable")
    return [RawQuoteSchema.from_domain(quotes[s]) for s in sorted(quotes)]
