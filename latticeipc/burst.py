"""Detection of unusually large Add orders relative to a symbol's history."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass

from latticeipc.alerts import BurstAlert
from latticeipc.events import EventType, OrderEvent
from latticeipc.welford import WelfordStats


@dataclass
class BurstConfig:
    """Tunable parameters for BurstDetector."""

    z_threshold: float = 4.0
    """Alert when an order's size z-score exceeds this value."""
    max_symbols: int = 64
    """Capacity of the symbol table; must be a power of two."""


class BurstDetector:
    """Fires when an Add order's quantity exceeds ``mean + z_threshold * stddev``
    of the symbol's earlier order sizes.

    Each order is checked against prior observations before it is added to
    them. With a zero standard deviation any larger order alerts with an
    infinite z-score.
    """

    def __init__(self, config: BurstConfig | None = None) -> None:
        cfg = config if config is not None else BurstConfig()
        if cfg.max_symbols < 1 or cfg.max_symbols & (cfg.max_symbols - 1):
            raise ValueError(f"max_symbols must be a power of two, got {cfg.max_symbols}")
        self.config = cfg
        self._table: dict[int, WelfordStats] = {}
        self._alerts_fired = 0

    @property
    def alerts_fired(self) -> int:
        return self._alerts_fired

    def process(self, event: OrderEvent, now_ns: int | None = None) -> BurstAlert | None:
        """Feed one event; return a BurstAlert if it is an abnormally large Add.

        The timestamp does not influence the decision; it is accepted so all
        detectors share one interface.
        """
        if event.type is not EventType.ADD:
            return None
        if now_ns is None:
            now_ns = time.monotonic_ns()
        stats = self._table.get(event.symbol_id)
        if stats is None:
            if len(self._table) >= self.config.max_symbols:
                return None
            stats = self._table[event.symbol_id] = WelfordStats()
        alert = None
        if stats.is_stable:
            mean = stats.mean
            stddev = stats.stddev
            if event.qty > mean + self.config.z_threshold * stddev:
                z_score = (event.qty - mean) / stddev if stddev > 0.0 else math.inf
                alert = BurstAlert(
                    symbol_id=event.symbol_id,
                    qty=event.qty,
                    order_id=event.order_id,
                    mean_qty=mean,
                    stddev_qty=stddev,
                    z_score=z_score,
                )
                self._alerts_fired += 1
        stats.update(float(event.qty))
        return alert

    def reset(self) -> None:
        self._table.clear()
        self._alerts_fired = 0