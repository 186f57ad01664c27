"""
HTTP quote client.
Batched POST of symbols to a real-time price endpoint.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

import httpx
from pydantic import ValidationError

from portfolio_dashboard.domain.models import RawQuote
from portfolio_dashboard.domain.schemas.quote import RawQuoteSchema
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed

logger = logging.getLogger(__name__)


class HttpQuoteClient:
    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        timeout_seconds: float = 10.0,
    ):
        self.api_url = api_url
        self.api_key = (api_key or "").strip() or None
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post_json(self, payload: dict) -> object:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.api_url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            raise FetchFailed(f"Quote request failed: {exc}") from exc

        if response.status_code != 200:
            logger.debug("Quote API %s: %s", response.status_code, (response.text or "")[:300])
            raise FetchFailed(
                f"Quote API returned status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailed("Quote API returned invalid JSON") from exc

    async def fetch_quotes(self, symbols: Set[str]) -> Dict[str, RawQuote]:
        requested = sorted(set(symbols))
        if not requested:
            return {}

        payload = await self._post_json({"symbols": requested})
        if not isinstance(payload, list):
            raise FetchFailed("Quote API payload is not a list")

        try:
            records = [RawQuoteSchema.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise FetchFailed(f"Malformed quote record: {exc.error_count()} error(s)") from exc

        wanted = set(requested)
        results: Dict[str, RawQuote] = {}
        for record in records:
            if record.symbol not in wanted:
                logger.debug("Ignoring unrequested symbol %s", record.symbol)
                continue
            results[record.symbol] = record.to_domain()

        missing = wanted - results.keys()
        if missing:
            logger.debug("Quote API omitted %d symbol(s): %s", len(missing), ", ".join(sorted(missing)))
        return results
