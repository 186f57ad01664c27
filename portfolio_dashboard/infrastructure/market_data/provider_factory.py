"""
Quote client factory (settings-driven).
"""

from __future__ import annotations

from typing import Optional

from portfolio_dashboard.config import Settings, settings as default_settings
from portfolio_dashboard.infrastructure.market_data.http_quote_client import HttpQuoteClient
from portfolio_dashboard.infrastructure.market_data.types import QuoteClient
from portfolio_dashboard.infrastructure.market_data.yfinance_provider import (
    YFinanceQuoteClient,
    parse_symbol_overrides,
)


def build_quote_client(name: str, cfg: Settings) -> QuoteClient:
    name = (name or "").lower()
    if name == "http":
        if not (cfg.QUOTE_API_URL or "").strip():
            raise ValueError("QUOTE_API_URL missing for http quote provider")
        return HttpQuoteClient(
            api_url=cfg.QUOTE_API_URL,
            api_key=cfg.QUOTE_API_KEY,
            timeout_seconds=cfg.QUOTE_TIMEOUT_SECONDS,
        )
    if name == "yfinance":
        return YFinanceQuoteClient(
            default_suffix=cfg.YF_DEFAULT_SUFFIX,
            symbol_overrides=parse_symbol_overrides(cfg.YF_SYMBOL_OVERRIDES),
        )
    raise ValueError(f"Unknown quote provider: {name}")


def get_quote_client(cfg: Optional[Settings] = None) -> QuoteClient:
    cfg = cfg or default_settings
    return build_quote_client(cfg.QUOTE_PROVIDER, cfg)
