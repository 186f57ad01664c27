"""
Portfolio session runtime: holdings, live cache, sector filter and poller.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from portfolio_dashboard.domain.models import ALL_SECTORS, Holding, PortfolioView
from portfolio_dashboard.domain.services.derivation_engine import build_view
from portfolio_dashboard.domain.services.sector_filter import SectorFilter, distinct_sectors
from portfolio_dashboard.infrastructure.market_data.live_cache import LiveCache
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed, QuoteClient
from portfolio_dashboard.realtime.poller import (
    DEFAULT_INTERVAL_MS,
    PollOutcome,
    QuotePoller,
    start_polling,
)

logger = logging.getLogger(__name__)

Subscriber = Callable[[PortfolioView], None]


class PortfolioSession:
    """
    Owns all mutable state of one portfolio view session.

    Subscribers get a fresh PortfolioView after every live cache update,
    filter change and holdings change.
    """

    def __init__(
        self,
        holdings: Sequence[Holding],
        client: QuoteClient,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        strict_ordering: bool = False,
        earnings_tz: Optional[tzinfo] = None,
        cache: Optional[LiveCache] = None,
    ):
        self._holdings: Tuple[Holding, ...] = tuple(holdings)
        self._client = client
        self._interval_ms = interval_ms
        self._strict_ordering = strict_ordering
        self._cache = cache if cache is not None else LiveCache(earnings_tz=earnings_tz)
        self._filter = SectorFilter()
        self._subscribers: List[Subscriber] = []
        self._poller: Optional[QuotePoller] = None

    @property
    def holdings(self) -> Tuple[Holding, ...]:
        return self._holdings

    @property
    def cache(self) -> LiveCache:
        return self._cache

    @property
    def active_filter(self) -> str:
        return self._filter.active_filter

    def is_running(self) -> bool:
        return self._poller is not None and self._poller.running

    async def start(self) -> None:
        if self._poller is not None:
            return
        self._poller = start_polling(
            self._client,
            self._symbols,
            self._handle_result,
            interval_ms=self._interval_ms,
            strict_ordering=self._strict_ordering,
        )
        logger.info(
            "Portfolio session started | holdings=%d interval_ms=%d",
            len(self._holdings),
            self._interval_ms,
        )

    async def stop(self) -> None:
        if self._poller is None:
            return
        poller, self._poller = self._poller, None
        await poller.stop()
        logger.info("Portfolio session stopped")

    # ------------------------------------------------------------------
    # SUBSCRIPTIONS
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        if not self._subscribers:
            return
        view = self.view()
        for callback in list(self._subscribers):
            try:
                callback(view)
            except Exception:
                logger.exception("Portfolio subscriber failed")

    # ------------------------------------------------------------------
    # MUTATIONS
    # ------------------------------------------------------------------

    def set_filter(self, sector: str) -> None:
        self._filter.select(sector, self._holdings)
        self._publish()

    async def set_holdings(self, holdings: Sequence[Holding]) -> None:
        """
        Replace the holdings. A running poller is restarted so fetches
        issued for the previous symbol set never land.
        """
        self._holdings = tuple(holdings)
        if (
            self._filter.active_filter != ALL_SECTORS
            and self._filter.active_filter not in distinct_sectors(self._holdings)
        ):
            self._filter.reset()

        if self._poller is not None:
            await self.stop()
            await self.start()
        self._publish()

    def _symbols(self) -> Set[str]:
        return {h.symbol for h in self._holdings}

    def _handle_result(self, outcome: PollOutcome) -> None:
        if isinstance(outcome, FetchFailed):
            # Cache stays as it was; live fields keep their last values
            return
        if not outcome:
            return
        self._cache.ingest(outcome)
        self._publish()

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------

    def view(self, active_filter: Optional[str] = None) -> PortfolioView:
        return build_view(
            self._holdings,
            self._cache,
            active_filter if active_filter is not None else self._filter.active_filter,
        )

    def get_status(self) -> Dict[str, object]:
        return {
            "running": self.is_running(),
            "holdings": len(self._holdings),
            "active_filter": self._filter.active_filter,
            "cached_symbols": len(self._cache),
            "poller": self._poller.get_status() if self._poller else None,
            "quotes": self._cache.get_status(),
        }
