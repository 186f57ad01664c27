"""
DOMAIN MODELS — HOLDINGS

Static portfolio line items. Fixed for the lifetime of a view session.
No market data, no I/O.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Holding:
    """
    A single portfolio line item.

    Callers guarantee purchase_price >= 0, quantity >= 0 and symbol
    uniqueness across a holdings list.
    """
    symbol: str
    stock_name: str
    purchase_price: float
    quantity: int
    exchange: str
    sector: str

    @property
    def investment(self) -> float:
        return self.purchase_price * self.quantity
