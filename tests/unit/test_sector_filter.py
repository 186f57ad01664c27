import pytest

from portfolio_dashboard.domain.models import ALL_SECTORS, Holding
from portfolio_dashboard.domain.services.sector_filter import (
    SectorFilter,
    apply_filter,
    distinct_sectors,
)


def test_distinct_sectors_sorted_and_deduplicated(sample_holdings):
    assert distinct_sectors(sample_holdings) == ["Energy", "Tech"]


def test_distinct_sectors_empty():
    assert distinct_sectors([]) == []


def test_sentinel_is_identity(sample_holdings):
    assert apply_filter(sample_holdings, ALL_SECTORS) == sample_holdings


def test_exact_match_keeps_input_order(sample_holdings):
    filtered = apply_filter(sample_holdings, "Tech")
    assert [h.symbol for h in filtered] == ["AAA", "CCC"]


def test_match_is_case_sensitive(sample_holdings):
    assert apply_filter(sample_holdings, "tech") == []


def test_sector_filter_defaults_to_all_sectors():
    assert SectorFilter().active_filter == ALL_SECTORS


def test_select_and_reset(sample_holdings):
    sector_filter = SectorFilter()
    sector_filter.select("Energy", sample_holdings)
    assert [h.symbol for h in sector_filter.apply(sample_holdings)] == ["BBB"]

    sector_filter.reset()
    assert sector_filter.apply(sample_holdings) == sample_holdings


def test_select_unknown_sector_rejected(sample_holdings):
    sector_filter = SectorFilter()
    with pytest.raises(ValueError):
        sector_filter.select("Utilities", sample_holdings)
    assert sector_filter.active_filter == ALL_SECTORS


def test_select_sentinel_always_allowed():
    sector_filter = SectorFilter("Tech")
    sector_filter.select(ALL_SECTORS, [Holding("X", "X", 1.0, 1, "NSE", "Tech")])
    assert sector_filter.active_filter == ALL_SECTORS
