from datetime import timezone
from typing import AsyncGenerator, Dict, List, Set

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from portfolio_dashboard.api.routes import health, market_data, portfolio
from portfolio_dashboard.domain.models import Holding, RawQuote
from portfolio_dashboard.realtime.runtime import PortfolioSession


class StubQuoteClient:
    """Returns canned quotes for whichever requested symbols it knows."""

    def __init__(self, quotes: Dict[str, RawQuote]):
        self.quotes = quotes
        self.calls: List[Set[str]] = []

    async def fetch_quotes(self, symbols):
        self.calls.append(set(symbols))
        return {s: q for s, q in self.quotes.items() if s in symbols}


@pytest.fixture()
def sample_holdings() -> List[Holding]:
    return [
        Holding("AAA", "Alpha Tech", 100.0, 10, "NSE", "Tech"),
        Holding("BBB", "Beta Energy", 50.0, 20, "NSE", "Energy"),
        Holding("CCC", "Gamma Tech", 200.0, 5, "BSE", "Tech"),
    ]


@pytest.fixture()
def sample_quotes() -> Dict[str, RawQuote]:
    return {
        "AAA": RawQuote("AAA", cmp=120.0, pe_ratio=15.0, earnings_timestamp=1700000000),
        "BBB": RawQuote("BBB", cmp=None, pe_ratio=None, earnings_timestamp=None),
    }


@pytest.fixture()
def stub_client(sample_quotes) -> StubQuoteClient:
    return StubQuoteClient(sample_quotes)


@pytest.fixture()
def session(sample_holdings, stub_client) -> PortfolioSession:
    return PortfolioSession(sample_holdings, stub_client, earnings_tz=timezone.utc)


@pytest.fixture()
async def app(session, stub_client) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
    app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])

    app.state.portfolio_session = session
    app.state.quote_client = stub_client
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
