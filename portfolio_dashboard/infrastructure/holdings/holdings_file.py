"""
Holdings file loader (YAML or JSON).

Accepts either a top-level list of holdings or a mapping with a
"holdings" key. Fails fast on malformed records and duplicate symbols.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Union

import yaml

from portfolio_dashboard.domain.models import Holding
from portfolio_dashboard.domain.schemas.holding import HoldingSchema

logger = logging.getLogger(__name__)


def parse_holdings(data: Any) -> List[Holding]:
    if isinstance(data, dict):
        data = data.get("holdings")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("Holdings must be a list")

    holdings: List[Holding] = []
    seen = set()
    for item in data:
        holding = HoldingSchema.model_validate(item).to_domain()
        if holding.symbol in seen:
            raise ValueError(f"Duplicate holding symbol: {holding.symbol}")
        seen.add(holding.symbol)
        holdings.append(holding)
    return holdings


def load_holdings(path: Union[str, Path]) -> List[Holding]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Holdings file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    holdings = parse_holdings(data)
    logger.info("Loaded %d holdings from %s", len(holdings), path)
    return holdings
