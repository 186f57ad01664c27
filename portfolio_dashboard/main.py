"""
FastAPI Main Application
Live portfolio dashboard: holdings + polled quotes + derived view
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from datetime import tzinfo
from zoneinfo import ZoneInfo
import logging

from portfolio_dashboard.config import settings
from portfolio_dashboard.core.logging import setup_logging
from portfolio_dashboard.infrastructure.holdings.holdings_file import load_holdings
from portfolio_dashboard.infrastructure.market_data.provider_factory import get_quote_client
from portfolio_dashboard.realtime.runtime import PortfolioSession

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _earnings_timezone() -> Optional[tzinfo]:
    if not settings.EARNINGS_TIMEZONE:
        return None
    return ZoneInfo(settings.EARNINGS_TIMEZONE)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Starts the portfolio session on startup, stops it on shutdown
    """
    logger.info("🚀 Starting Portfolio Dashboard")

    holdings = load_holdings(settings.HOLDINGS_FILE)
    quote_client = get_quote_client(settings)
    logger.info("📊 Quote provider: %s", settings.QUOTE_PROVIDER)

    session = PortfolioSession(
        holdings,
        quote_client,
        interval_ms=settings.POLL_INTERVAL_MS,
        strict_ordering=settings.POLL_STRICT_ORDERING,
        earnings_tz=_earnings_timezone(),
    )
    app.state.quote_client = quote_client
    app.state.portfolio_session = session
    await session.start()
    logger.info("✅ Portfolio session running")

    try:
        yield
    finally:
        logger.info("🛑 Shutting down Portfolio Dashboard")
        await session.stop()
        app.state.portfolio_session = None


app = FastAPI(
    title="Portfolio Dashboard",
    description="Live equity portfolio with sector filtering",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "📊 My Portfolio Dashboard",
        "version": "1.0.0",
        "docs": "/docs",
    }


# Import and include routers
from portfolio_dashboard.api.routes import health, market_data, portfolio

app.include_router(health.router, tags=["Health"])
app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])
app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portfolio_dashboard.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
