"""Tracked orders and the alerts the anomaly detectors emit."""

from __future__ import annotations

from dataclasses import dataclass

_alert = dataclass(frozen=True)


@dataclass
class PendingOrder:
    """A large order tracked for possible spoofing; order id 0 marks an empty entry."""

    order_id: int = 0
    price: float = 0.0
    qty: int = 0
    placed_ns: int = 0

    def is_valid(self) -> bool:
        return self.order_id != 0

    def invalidate(self) -> None:
        self.order_id = 0


@_alert
class SpoofAlert:
    """A large order cancelled unusually fast.

    ``z_score`` is sigma from the mean cancel latency; negative means fast.
    """

    order_id: int = 0
    price: float = 0.0
    qty: int = 0
    placed_ns: int = 0
    cancelled_ns: int = 0
    z_score: float = 0.0


@_alert
class BurstAlert:
    """An Add order far larger than the symbol's usual order size."""

    symbol_id: int = 0
    qty: int = 0
    order_id: int = 0
    mean_qty: float = 0.0
    stddev_qty: float = 0.0
    z_score: float = 0.0


@_alert
class CancelSpikeAlert:
    """A symbol's cancellation rate far above its historical rate."""

    symbol_id: int = 0
    cancels_per_sec: float = 0.0
    mean_rate: float = 0.0
    stddev_rate: float = 0.0
    z_score: float = 0.0


@_alert
class LayeringAlert:
    """Too many large orders on one side of a symbol within the window.

    ``window_start_ns`` is the timestamp of the oldest order in the window.
    """

    symbol_id: int = 0
    is_bid: bool = False
    order_count: int = 0
    window_start_ns: int = 0
    triggered_ns: int = 0