"""
DOMAIN MODELS — LIVE QUOTES

RawQuote is what a quote source returns, nullable fields included.
NormalizedQuote is what the live cache stores; nullability of the price is
resolved at ingestion so downstream code never branches on raw values again.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

EARNINGS_LABEL_FORMAT = "%b %d"


@dataclass(frozen=True)
class RawQuote:
    symbol: str
    cmp: Optional[float] = None
    pe_ratio: Optional[float] = None
    earnings_timestamp: Optional[int] = None


@dataclass(frozen=True)
class NormalizedQuote:
    cmp: float
    pe_ratio: Optional[float]
    latest_earnings: Optional[str]


def format_earnings_label(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """
    Render an epoch-seconds earnings timestamp as e.g. "Nov 14".

    With tz=None the host's local timezone is used.
    """
    if tz is None:
        moment = datetime.fromtimestamp(timestamp)
    else:
        moment = datetime.fromtimestamp(timestamp, tz=tz)
    return moment.strftime(EARNINGS_LABEL_FORMAT)


def _finite(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def normalize_quote(raw: RawQuote, tz: Optional[tzinfo] = None) -> NormalizedQuote:
    """
    NaN/inf count as missing. A timestamp datetime cannot represent
    (e.g. epoch milliseconds) leaves latest_earnings unset.
    """
    latest_earnings = None
    # bool is an int subclass but never a timestamp
    if isinstance(raw.earnings_timestamp, (int, float)) and not isinstance(raw.earnings_timestamp, bool):
        try:
            latest_earnings = format_earnings_label(int(raw.earnings_timestamp), tz)
        except (OverflowError, OSError, ValueError):
            latest_earnings = None

    cmp = _finite(raw.cmp)
    return NormalizedQuote(
        cmp=cmp if cmp is not None else 0.0,
        pe_ratio=_finite(raw.pe_ratio),
        latest_earnings=latest_earnings,
    )
