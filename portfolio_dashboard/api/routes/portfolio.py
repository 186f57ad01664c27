"""
Portfolio API Routes
Live-derived holdings view, sector list and quote cache status
"""

from fastapi import APIRouter, HTTPException, Request
from typing import List, Optional
import logging

from portfolio_dashboard.config import settings
from portfolio_dashboard.domain.schemas.portfolio import PortfolioViewResponse
from portfolio_dashboard.realtime.runtime import PortfolioSession

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_session(request: Request) -> PortfolioSession:
    session = getattr(request.app.state, "portfolio_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Portfolio session not initialized")
    return session


@router.get("", response_model=PortfolioViewResponse)
async def get_portfolio(request: Request, sector: Optional[str] = None):
    """
    Current portfolio view. Passing `sector` also selects it as the
    session's active filter.
    """
    session = _get_session(request)
    if sector is not None:
        try:
            session.set_filter(sector)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
    return PortfolioViewResponse.from_view(session.view(), currency=settings.CURRENCY_SYMBOL)


@router.get("/sectors", response_model=List[str])
async def get_sectors(request: Request):
    session = _get_session(request)
    return list(session.view().sectors)


@router.get("/status")
async def get_status(request: Request):
    """Poller state and per-symbol quote age."""
    return _get_session(request).get_status()
