"""
Quote poller: fixed-cadence live quote refresh on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional, Set, Union

from portfolio_dashboard.domain.models import RawQuote
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed, QuoteClient

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 6000

PollOutcome = Union[Dict[str, RawQuote], FetchFailed]
SymbolsProvider = Callable[[], Iterable[str]]
ResultHandler = Callable[[PollOutcome], None]


class QuotePoller:
    """
    Fires one tick immediately on start, then one every interval_ms until
    cancelled.

    Ticks never wait on each other: a slow fetch does not delay the next
    tick and overlapping fetches are allowed. Results are handed over in
    the order they resolve. With strict_ordering, a success older than the
    newest success already handed over is dropped.

    After cancel(), no further tick fires and results of fetches still in
    flight are discarded.
    """

    def __init__(
        self,
        client: QuoteClient,
        get_symbols: SymbolsProvider,
        on_result: ResultHandler,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        strict_ordering: bool = False,
    ):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._client = client
        self._get_symbols = get_symbols
        self._on_result = on_result
        self.interval_ms = interval_ms
        self.strict_ordering = strict_ordering

        self._task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        self._cancelled = False
        self._seq = 0
        self._last_applied_seq = 0
        self._status: Dict[str, object] = {
            "ticks": 0,
            "successes": 0,
            "failures": 0,
            "discarded": 0,
            "last_success_at": None,
            "last_error": None,
        }

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._cancelled

    def start(self) -> "QuotePoller":
        if self._task is not None or self._cancelled:
            raise RuntimeError("QuotePoller can only be started once")
        self._task = asyncio.create_task(self._run())
        return self

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()
        for task in list(self._inflight):
            task.cancel()
        logger.debug("Quote poller cancelled with %d fetch(es) in flight", len(self._inflight))

    async def stop(self) -> None:
        """Cancel and wait for the timer and in-flight ticks to unwind."""
        self.cancel()
        pending = [t for t in (self._task, *self._inflight) if t is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def get_status(self) -> Dict[str, object]:
        status = dict(self._status)
        status["running"] = self.running
        status["in_flight"] = len(self._inflight)
        status["last_applied_seq"] = self._last_applied_seq
        status["interval_ms"] = self.interval_ms
        return status

    # ------------------------------------------------------------------
    # INTERNALS
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        interval = self.interval_ms / 1000.0
        while not self._cancelled:
            self._spawn_tick()
            await asyncio.sleep(interval)

    def _spawn_tick(self) -> None:
        self._seq += 1
        self._status["ticks"] = self._seq
        task = asyncio.create_task(self._tick(self._seq))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _tick(self, seq: int) -> None:
        try:
            symbols = {s for s in self._get_symbols() if s}
        except Exception:
            logger.exception("Failed to resolve symbols for poll %d", seq)
            return
        if not symbols:
            logger.debug("Poll %d skipped: no symbols", seq)
            return

        outcome: PollOutcome
        try:
            outcome = await self._client.fetch_quotes(symbols)
        except FetchFailed as exc:
            outcome = exc
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            outcome = FetchFailed(f"Unexpected quote client error: {exc}")

        if self._cancelled:
            self._status["discarded"] = int(self._status["discarded"]) + 1
            logger.debug("Discarding poll %d result: poller cancelled", seq)
            return

        if isinstance(outcome, FetchFailed):
            self._status["failures"] = int(self._status["failures"]) + 1
            self._status["last_error"] = str(outcome)
            logger.warning("Quote poll %d failed: %s", seq, outcome)
        else:
            if self.strict_ordering and seq < self._last_applied_seq:
                self._status["discarded"] = int(self._status["discarded"]) + 1
                logger.debug("Discarding stale poll %d (applied %d)", seq, self._last_applied_seq)
                return
            self._last_applied_seq = max(self._last_applied_seq, seq)
            self._status["successes"] = int(self._status["successes"]) + 1
            self._status["last_success_at"] = datetime.now(tz=timezone.utc).isoformat()

        try:
            self._on_result(outcome)
        except Exception:
            logger.exception("Poll result handler failed for poll %d", seq)


def start_polling(
    client: QuoteClient,
    get_symbols: SymbolsProvider,
    on_result: ResultHandler,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    strict_ordering: bool = False,
) -> QuotePoller:
    """
    Start polling and return the poller as its own cancel handle.
    Must be called from inside a running event loop.
    """
    poller = QuotePoller(
        client,
        get_symbols,
        on_result,
        interval_ms=interval_ms,
        strict_ordering=strict_ordering,
    )
    return poller.start()
