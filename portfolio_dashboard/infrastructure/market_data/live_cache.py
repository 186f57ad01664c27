"""
In-memory live quote cache keyed by symbol.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone, tzinfo
from typing import Dict, Mapping, Optional

from portfolio_dashboard.domain.models import NormalizedQuote, RawQuote, normalize_quote


class LiveCache:
    """
    Latest successfully normalized quote per symbol.

    Entries are only added or overwritten; a failed or partial poll never
    clears anything. Absent means "never fetched".
    """

    def __init__(self, earnings_tz: Optional[tzinfo] = None):
        self._quotes: Dict[str, NormalizedQuote] = {}
        self._updated_at: Dict[str, datetime] = {}
        self._earnings_tz = earnings_tz
        self._lock = threading.Lock()

    def merge(self, update: Mapping[str, NormalizedQuote], ts: Optional[datetime] = None) -> None:
        if not update:
            return
        if ts is None:
            ts = datetime.now(tz=timezone.utc)
        with self._lock:
            for symbol, quote in update.items():
                if not symbol:
                    continue
                self._quotes[symbol] = quote
                self._updated_at[symbol] = ts

    def ingest(self, raw_quotes: Mapping[str, RawQuote], ts: Optional[datetime] = None) -> Dict[str, NormalizedQuote]:
        """
        Normalize raw quotes and merge them. Returns the normalized update.
        """
        update = {
            symbol: normalize_quote(raw, self._earnings_tz)
            for symbol, raw in raw_quotes.items()
        }
        self.merge(update, ts)
        return update

    def get(self, symbol: str) -> Optional[NormalizedQuote]:
        with self._lock:
            return self._quotes.get(symbol)

    def snapshot(self) -> Dict[str, NormalizedQuote]:
        with self._lock:
            return dict(self._quotes)

    def __contains__(self, symbol: object) -> bool:
        with self._lock:
            return symbol in self._quotes

    def __len__(self) -> int:
        with self._lock:
            return len(self._quotes)

    def get_status(self) -> Dict[str, object]:
        now = datetime.now(tz=timezone.utc)
        with self._lock:
            items = [(s, q, self._updated_at[s]) for s, q in self._quotes.items()]
        status = {}
        for symbol, quote, ts in items:
            status[symbol] = {
                "cmp": quote.cmp,
                "ts": ts.isoformat(),
                "age_seconds": (now - ts).total_seconds(),
            }
        return status
