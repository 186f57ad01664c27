import asyncio
from datetime import timezone

import pytest

from portfolio_dashboard.domain.models import (
    ALL_SECTORS,
    PRICE_LIVE,
    PRICE_UNAVAILABLE,
    Holding,
    RawQuote,
)
from portfolio_dashboard.infrastructure.market_data.types import FetchFailed
from portfolio_dashboard.realtime.runtime import PortfolioSession


async def wait_until(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.001)


class FailingClient:
    def __init__(self):
        self.calls = 0

    async def fetch_quotes(self, symbols):
        self.calls += 1
        raise FetchFailed("upstream down")


@pytest.mark.asyncio
async def test_first_poll_populates_cache_and_notifies(session, stub_client):
    views = []
    session.subscribe(views.append)

    await session.start()
    await wait_until(lambda: views)
    await session.stop()

    assert stub_client.calls[0] == {"AAA", "BBB", "CCC"}
    rows = {r.symbol: r for r in views[0].rows}
    assert rows["AAA"].cmp == 120.0
    assert rows["AAA"].gain_loss == 200.0
    assert rows["AAA"].latest_earnings == "Nov 14"
    assert rows["AAA"].price_status == PRICE_LIVE
    # fetched but null price
    assert rows["BBB"].cmp == 0.0
    assert rows["BBB"].price_status == PRICE_LIVE
    # never returned by the source
    assert rows["CCC"].price_status == PRICE_UNAVAILABLE
    assert rows["CCC"].gain_loss == -1000.0


@pytest.mark.asyncio
async def test_failed_poll_leaves_cache_untouched(sample_holdings):
    client = FailingClient()
    session = PortfolioSession(sample_holdings, client, interval_ms=5, earnings_tz=timezone.utc)
    session.cache.ingest({"AAA": RawQuote("AAA", cmp=110.0)})
    before = session.cache.snapshot()
    rows_before = [r.cmp for r in session.view().rows]

    await session.start()
    await wait_until(lambda: client.calls >= 2)
    await session.stop()

    assert session.cache.snapshot() == before
    assert [r.cmp for r in session.view().rows] == rows_before
    assert session.get_status()["poller"] is None


@pytest.mark.asyncio
async def test_set_filter_publishes_filtered_view(session):
    views = []
    session.subscribe(views.append)

    session.set_filter("Tech")

    assert session.active_filter == "Tech"
    assert [r.symbol for r in views[-1].rows] == ["AAA", "CCC"]
    assert views[-1].total_investment == 2000
    assert sum(r.portfolio_percent for r in views[-1].rows) == pytest.approx(100.0)


def test_set_filter_rejects_unknown_sector(session):
    with pytest.raises(ValueError):
        session.set_filter("Utilities")
    assert session.active_filter == ALL_SECTORS


def test_view_with_explicit_filter_does_not_change_selection(session):
    view = session.view("Energy")

    assert [r.symbol for r in view.rows] == ["BBB"]
    assert session.active_filter == ALL_SECTORS


@pytest.mark.asyncio
async def test_set_holdings_discards_results_for_old_symbols():
    gate = asyncio.Event()

    class GatedClient:
        def __init__(self):
            self.calls = []

        async def fetch_quotes(self, symbols):
            self.calls.append(set(symbols))
            if len(self.calls) == 1:
                await gate.wait()
                return {"OLD": RawQuote("OLD", cmp=1.0)}
            return {"NEW": RawQuote("NEW", cmp=2.0)}

    client = GatedClient()
    session = PortfolioSession(
        [Holding("OLD", "Old Co", 1.0, 1, "NSE", "Tech")], client, interval_ms=60_000
    )
    session.set_filter("Tech")

    await session.start()
    await wait_until(lambda: client.calls)
    await session.set_holdings([Holding("NEW", "New Co", 1.0, 1, "NSE", "Energy")])
    gate.set()
    await wait_until(lambda: "NEW" in session.cache)
    await session.stop()

    assert "OLD" not in session.cache
    assert client.calls[1] == {"NEW"}
    # the old sector disappeared with the old holdings
    assert session.active_filter == ALL_SECTORS


@pytest.mark.asyncio
async def test_set_holdings_while_stopped_only_republishes(session, sample_holdings):
    views = []
    session.subscribe(views.append)

    await session.set_holdings(sample_holdings[:1])

    assert not session.is_running()
    assert [r.symbol for r in views[-1].rows] == ["AAA"]
    assert views[-1].sectors == ("Tech",)


def test_subscriber_errors_are_isolated(session):
    seen = []

    def broken(view):
        raise RuntimeError("render failed")

    session.subscribe(broken)
    session.subscribe(seen.append)

    session.set_filter("Energy")

    assert len(seen) == 1


def test_unsubscribe_stops_notifications(session):
    seen = []
    unsubscribe = session.subscribe(seen.append)
    unsubscribe()
    unsubscribe()

    session.set_filter("Energy")

    assert seen == []


@pytest.mark.asyncio
async def test_start_and_stop_are_idempotent(session):
    await session.start()
    await session.start()
    assert session.is_running()

    await session.stop()
    await session.stop()
    assert not session.is_running()
