"""Detection of abnormal spikes in a symbol's cancellation rate."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

from latticeipc.alerts import CancelSpikeAlert
from latticeipc.events import EventType, OrderEvent
from latticeipc.welford import WelfordStats

_NS_PER_SEC = 1_000_000_000


@dataclass
class CancelSpikeConfig:
    """Tunable parameters for CancelSpikeDetector."""

    rate_window_ns: int = 1_000_000_000
    """Bucket width over which the cancel rate is measured."""
    z_threshold: float = 3.0
    """Alert when the rate's z-score exceeds this value."""
    max_symbols: int = 64
    """Capacity of the symbol table; must be a power of two."""


@dataclass
class _RateEntry:
    window_start_ns: int
    cancel_count: int = 0
    rate_stats: WelfordStats = field(default_factory=WelfordStats)


class CancelSpikeDetector:
    """Compares each completed bucket's cancels per second with the symbol's history.

    A bucket closes on the first cancel at least ``rate_window_ns`` after it
    opened. Its rate is checked against the earlier rates (alert when it
    exceeds ``mean + z_threshold * stddev``) and then added to them. With a
    zero standard deviation any rate above the mean alerts with an infinite
    z-score.
    """

    def __init__(self, config: CancelSpikeConfig | None = None) -> None:
        cfg = config if config is not None else CancelSpikeConfig()
        if cfg.max_symbols < 1 or cfg.max_symbols & (cfg.max_symbols - 1):
            raise ValueError(f"max_symbols must be a power of two, got {cfg.max_symbols}")
        if cfg.rate_window_ns <= 0:
            raise ValueError(f"rate_window_ns must be positive, got {cfg.rate_window_ns}")
        self.config = cfg
        self._table: dict[int, _RateEntry] = {}
        self._alerts_fired = 0

    @property
    def alerts_fired(self) -> int:
        return self._alerts_fired

    def process(self, event: OrderEvent, now_ns: int | None = None) -> CancelSpikeAlert | None:
        """Feed one event; return an alert if it closes a bucket with a spike."""
        if event.type is not EventType.CANCEL:
            return None
        now = time.monotonic_ns() if now_ns is None else now_ns
        entry = self._table.get(event.symbol_id)
        if entry is None:
            if len(self._table) >= self.config.max_symbols:
                return None
            entry = self._table[event.symbol_id] = _RateEntry(window_start_ns=now)
        alert = None
        if now - entry.window_start_ns >= self.config.rate_window_ns:
            rate = entry.cancel_count * _NS_PER_SEC / self.config.rate_window_ns
            alert = self._check(event.symbol_id, rate, entry.rate_stats)
            entry.rate_stats.update(rate)
            entry.window_start_ns = now
            entry.cancel_count = 0
        entry.cancel_count += 1
        return alert

    def _check(self, symbol_id: int, rate: float, stats: WelfordStats) -> CancelSpikeAlert | None:
        if not stats.is_stable:
            return None
        mean = stats.mean
        stddev = stats.stddev
        if rate <= mean + self.config.z_threshold * stddev:
            return None
        z_score = (rate - mean) / stddev if stddev > 0.0 else math.inf
        self._alerts_fired += 1
        return CancelSpikeAlert(
            symbol_id=symbol_id,
            cancels_per_sec=rate,
            mean_rate=mean,
            stddev_rate=stddev,
            z_score=z_score,
        )

    def reset(self) -> None:
        self._table.clear()
        self._alerts_fired = 0