"""
SECTOR FILTER
Distinct sector listing and the currently selected filter value.

RULES:
✅ Sectors sorted ascending, no duplicates
✅ "All Sectors" means no filtering
✅ Exact string match otherwise
"""

from typing import Iterable, List, Sequence

from portfolio_dashboard.domain.models import ALL_SECTORS, Holding


def distinct_sectors(holdings: Iterable[Holding]) -> List[str]:
    return sorted({h.sector for h in holdings})


def apply_filter(holdings: Sequence[Holding], active_filter: str) -> List[Holding]:
    """Return holdings in input order, restricted to the active sector."""
    if active_filter == ALL_SECTORS:
        return list(holdings)
    return [h for h in holdings if h.sector == active_filter]


class SectorFilter:
    """
    Holds the selected sector for a view session.
    """

    def __init__(self, active_filter: str = ALL_SECTORS):
        self.active_filter = active_filter

    def reset(self) -> None:
        self.active_filter = ALL_SECTORS

    def select(self, sector: str, holdings: Iterable[Holding]) -> None:
        """
        Select a sector, rejecting values not present in the holdings.
        """
        if sector != ALL_SECTORS and sector not in distinct_sectors(holdings):
            raise ValueError(f"Unknown sector: {sector}")
        self.active_filter = sector

    def apply(self, holdings: Sequence[Holding]) -> List[Holding]:
        return apply_filter(holdings, self.active_filter)
