"""Spoofing detection: large orders placed and then cancelled unusually fast."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass

from latticeipc.alerts import PendingOrder, SpoofAlert
from latticeipc.events import EventType, OrderEvent
from latticeipc.welford import WelfordStats


@dataclass
class AnomalyConfig:
    """Tunable parameters for AnomalyDetector."""

    qty_threshold: int = 1000
    """Minimum quantity for an order to be tracked as large."""
    time_window_ns: int = 500_000_000
    """Orders older than this are dropped from tracking."""
    z_score_threshold: float = -2.0
    """Alert when the cancel-latency z-score falls below this value."""
    max_tracked_orders: int = 4096
    """Capacity of the order table; must be a power of two."""
    rolling_window_sz: int = 256
    """Number of recent cancel latencies kept for diagnostics."""


def _is_power_of_two(value: int) -> bool:
    return value >= 1 and value & (value - 1) == 0


class AnomalyDetector:
    """Flags large orders whose cancellation latency is far below the running mean.

    Large Add orders are tracked. When a tracked order is cancelled within
    ``time_window_ns``, its latency joins the running statistics and the
    z-score of that latency is computed; a z-score below the threshold yields
    a SpoofAlert.
    """

    def __init__(self, config: AnomalyConfig | None = None) -> None:
        cfg = config if config is not None else AnomalyConfig()
        if not _is_power_of_two(cfg.max_tracked_orders):
            raise ValueError(
                f"max_tracked_orders must be a power of two, got {cfg.max_tracked_orders}"
            )
        if cfg.rolling_window_sz < 1:
            raise ValueError(f"rolling_window_sz must be positive, got {cfg.rolling_window_sz}")
        self.config = cfg
        self._orders: dict[int, PendingOrder] = {}
        self._latencies: deque[float] = deque(maxlen=cfg.rolling_window_sz)
        self._stats = WelfordStats()
        self._alerts_fired = 0
        self._orders_tracked = 0

    @property
    def stats(self) -> WelfordStats:
        """Running statistics of cancel latencies in nanoseconds."""
        return self._stats

    @property
    def alerts_fired(self) -> int:
        return self._alerts_fired

    @property
    def orders_tracked(self) -> int:
        """Number of large orders that have been taken into tracking."""
        return self._orders_tracked

    @property
    def pending_orders(self) -> int:
        """Number of large orders currently tracked."""
        return len(self._orders)

    @property
    def recent_latencies(self) -> tuple[float, ...]:
        """The most recent cancel latencies, oldest first."""
        return tuple(self._latencies)

    def process(self, event: OrderEvent, now_ns: int | None = None) -> SpoofAlert | None:
        """Feed one event; return a SpoofAlert if it completes a suspicious cancel."""
        now = time.monotonic_ns() if now_ns is None else now_ns
        if event.type is EventType.ADD:
            self._on_add(event, now)
        elif event.type is EventType.CANCEL:
            return self._on_cancel(event, now)
        return None

    def _on_add(self, event: OrderEvent, now: int) -> None:
        if event.qty < self.config.qty_threshold or event.order_id == 0:
            return
        if event.order_id not in self._orders and len(self._orders) >= self.config.max_tracked_orders:
            self._evict_stale(now)
            if len(self._orders) >= self.config.max_tracked_orders:
                return
        self._orders[event.order_id] = PendingOrder(
            order_id=event.order_id, price=event.price, qty=event.qty, placed_ns=now
        )
        self._orders_tracked += 1

    def _on_cancel(self, event: OrderEvent, now: int) -> SpoofAlert | None:
        order = self._orders.pop(event.order_id, None)
        if order is None:
            return None
        elapsed = max(0, now - order.placed_ns)
        if elapsed > self.config.time_window_ns:
            return None
        self._latencies.append(float(elapsed))
        self._stats.update(float(elapsed))
        if not self._stats.is_stable:
            return None
        stddev = self._stats.stddev
        if stddev <= 0.0:
            return None
        z_score = (elapsed - self._stats.mean) / stddev
        if z_score >= self.config.z_score_threshold:
            return None
        self._alerts_fired += 1
        return SpoofAlert(
            order_id=order.order_id,
            price=order.price,
            qty=order.qty,
            placed_ns=order.placed_ns,
            cancelled_ns=now,
            z_score=z_score,
        )

    def _evict_stale(self, now: int) -> None:
        window = self.config.time_window_ns
        stale = [oid for oid, o in self._orders.items() if now - o.placed_ns > window]
        for oid in stale:
            del self._orders[oid]

    def reset(self) -> None:
        self._orders.clear()
        self._latencies.clear()
        self._stats.reset()
        self._alerts_fired = 0
        self._orders_tracked = 0