"""
YFinance Quote Client
Live price, P/E and earnings date from Yahoo Finance for Indian equities
"""

import asyncio
import logging
import math
from typing import Dict, List, Optional, Set

import yfinance as yf

from portfolio_dashboard.domain.models import RawQuote
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed

logger = logging.getLogger(__name__)

_PRICE_KEYS = ("currentPrice", "regularMarketPrice")


def parse_symbol_overrides(raw: str) -> Dict[str, str]:
    """
    Parse Yahoo symbol overrides.

    Format: "TATAMOTORS=TATAMOTORS.BO,FOO=FOO.NS"
    """
    overrides: Dict[str, str] = {}
    for pair in (raw or "").split(","):
        pair = pair.strip()
        if not pair or "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        key = key.strip().upper()
        value = value.strip()
        if key and value:
            overrides[key] = value
    return overrides


def _as_float(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # Yahoo reports "Infinity" P/E and NaN prices
    return number if math.isfinite(number) else None


def _as_int(value: object) -> Optional[int]:
    number = _as_float(value)
    return int(number) if number is not None else None


class YFinanceQuoteClient:
    """
    Yahoo Finance quote client.
    Async-safe via thread offloading
    """

    def __init__(self, default_suffix: str = ".NS", symbol_overrides: Optional[Dict[str, str]] = None):
        self.default_suffix = default_suffix
        self.symbol_mapping = {k.upper(): v for k, v in (symbol_overrides or {}).items()}

    def to_yahoo_symbol(self, symbol: str) -> str:
        mapped = self.symbol_mapping.get(symbol.upper())
        if mapped:
            return mapped
        if "." in symbol or symbol.startswith("^"):
            return symbol
        return f"{symbol}{self.default_suffix}"

    # ------------------------------------------------------------------
    # INTERNAL HELPERS
    # ------------------------------------------------------------------

    def _load_info(self, yf_symbol: str) -> dict:
        return yf.Ticker(yf_symbol).info or {}

    async def _info(self, yf_symbol: str) -> dict:
        return await asyncio.to_thread(self._load_info, yf_symbol)

    @staticmethod
    def _to_raw_quote(symbol: str, info: dict) -> Optional[RawQuote]:
        cmp = None
        for key in _PRICE_KEYS:
            cmp = _as_float(info.get(key))
            if cmp is not None:
                break
        pe_ratio = _as_float(info.get("trailingPE"))
        earnings_ts = _as_int(info.get("earningsTimestamp"))

        if cmp is None and pe_ratio is None and earnings_ts is None:
            return None
        return RawQuote(
            symbol=symbol,
            cmp=cmp,
            pe_ratio=pe_ratio,
            earnings_timestamp=earnings_ts,
        )

    # ------------------------------------------------------------------
    # QUOTES
    # ------------------------------------------------------------------

    async def fetch_quotes(self, symbols: Set[str]) -> Dict[str, RawQuote]:
        requested: List[str] = sorted(set(symbols))
        if not requested:
            return {}

        infos = await asyncio.gather(
            *(self._info(self.to_yahoo_symbol(s)) for s in requested),
            return_exceptions=True,
        )

        results: Dict[str, RawQuote] = {}
        failures = 0
        for symbol, info in zip(requested, infos):
            if isinstance(info, Exception):
                failures += 1
                logger.error("Error fetching quote for %s: %s", symbol, info)
                continue
            quote = self._to_raw_quote(symbol, info)
            if quote is None:
                logger.warning("No quote data for %s", symbol)
                continue
            results[symbol] = quote

        if failures == len(requested):
            raise FetchFailed(f"Yahoo Finance unavailable for all {failures} symbol(s)")
        return results
