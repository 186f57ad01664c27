import pytest

from portfolio_dashboard.domain.models import RawQuote
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed
from portfolio_dashboard.infrastructure.market_data.yfinance_provider import (
    YFinanceQuoteClient,
    parse_symbol_overrides,
)


def test_parse_symbol_overrides():
    assert parse_symbol_overrides(" tatamotors=TATAMOTORS.BO, bad, =X, FOO=FOO.NS ") == {
        "TATAMOTORS": "TATAMOTORS.BO",
        "FOO": "FOO.NS",
    }
    assert parse_symbol_overrides("") == {}


def test_yahoo_symbol_resolution():
    client = YFinanceQuoteClient(default_suffix=".NS", symbol_overrides={"tatamotors": "TATAMOTORS.BO"})

    assert client.to_yahoo_symbol("HDFCBANK") == "HDFCBANK.NS"
    assert client.to_yahoo_symbol("TATAMOTORS") == "TATAMOTORS.BO"
    assert client.to_yahoo_symbol("INFY.BO") == "INFY.BO"
    assert client.to_yahoo_symbol("^NSEI") == "^NSEI"


@pytest.mark.asyncio
async def test_fetch_quotes_maps_info_fields(monkeypatch):
    infos = {
        "AAA.NS": {"currentPrice": 120.0, "trailingPE": 15.0, "earningsTimestamp": 1700000000},
        "BBB.NS": {"regularMarketPrice": 50.5},
        "CCC.NS": {},
    }
    client = YFinanceQuoteClient()
    monkeypatch.setattr(client, "_load_info", lambda yf_symbol: infos[yf_symbol])

    quotes = await client.fetch_quotes({"AAA", "BBB", "CCC"})

    assert quotes == {
        "AAA": RawQuote("AAA", cmp=120.0, pe_ratio=15.0, earnings_timestamp=1700000000),
        "BBB": RawQuote("BBB", cmp=50.5),
    }


@pytest.mark.asyncio
async def test_single_symbol_failure_is_omitted(monkeypatch):
    def load(yf_symbol):
        if yf_symbol == "BAD.NS":
            raise RuntimeError("404")
        return {"currentPrice": 10}

    client = YFinanceQuoteClient()
    monkeypatch.setattr(client, "_load_info", load)

    quotes = await client.fetch_quotes({"GOOD", "BAD"})

    assert set(quotes) == {"GOOD"}


@pytest.mark.asyncio
async def test_all_symbols_failing_raises(monkeypatch):
    def load(yf_symbol):
        raise RuntimeError("rate limited")

    client = YFinanceQuoteClient()
    monkeypatch.setattr(client, "_load_info", load)

    with pytest.raises(FetchFailed):
        await client.fetch_quotes({"AAA", "BBB"})


@pytest.mark.asyncio
async def test_non_numeric_fields_become_null(monkeypatch):
    client = YFinanceQuoteClient()
    monkeypatch.setattr(
        client,
        "_load_info",
        lambda yf_symbol: {"currentPrice": 99, "trailingPE": "Infinity?", "earningsTimestamp": None},
    )

    quotes = await client.fetch_quotes({"AAA"})

    assert quotes["AAA"] == RawQuote("AAA", cmp=99.0, pe_ratio=None, earnings_timestamp=None)


@pytest.mark.asyncio
async def test_non_finite_info_values_are_dropped(monkeypatch):
    infos = {
        "AAA.NS": {"currentPrice": float("nan"), "regularMarketPrice": 118.5, "trailingPE": "Infinity"},
        "BBB.NS": {"currentPrice": 50.0, "trailingPE": float("-inf")},
    }
    client = YFinanceQuoteClient()
    monkeypatch.setattr(client, "_load_info", lambda yf_symbol: infos[yf_symbol])

    quotes = await client.fetch_quotes({"AAA", "BBB"})

    assert quotes == {
        "AAA": RawQuote("AAA", cmp=118.5),
        "BBB": RawQuote("BBB", cmp=50.0),
    }
