"""
Quote client protocol and fetch error.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Set

from portfolio_dashboard.domain.models import RawQuote


class FetchFailed(Exception):
    """
    Transport failure, non-success response or malformed payload from a
    quote source. Symbols simply missing from a response are not failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QuoteClient(Protocol):
    async def fetch_quotes(self, symbols: Set[str]) -> Dict[str, RawQuote]:
        ...
