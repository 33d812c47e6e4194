"""Decoded order-book events fed to the anomaly detectors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_MAX_SYMBOL = 0xFFFF


class EventType(Enum):
    """Kind of order-book event."""

    ADD = "add"
    CANCEL = "cancel"
    MODIFY = "modify"
    TRADE = "trade"


@dataclass(frozen=True)
class OrderEvent:
    """One order-book event for a symbol.

    ``symbol_id`` identifies the instrument (a 16-bit value); ``is_bid``
    gives the side of the book.
    """

    type: EventType
    order_id: int
    price: float
    qty: int
    is_bid: bool = True
    symbol_id: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", EventType(self.type))
        if self.order_id < 0:
            raise ValueError(f"order_id must be non-negative, got {self.order_id}")
        if self.qty < 0:
            raise ValueError(f"qty must be non-negative, got {self.qty}")
        if not 0 <= self.symbol_id <= _MAX_SYMBOL:
            raise ValueError(f"symbol_id must fit in 16 bits, got {self.symbol_id}")