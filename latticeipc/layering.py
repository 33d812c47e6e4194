"""Layering detection: many large orders stacked on one side of a symbol."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass

from latticeipc.alerts import LayeringAlert
from latticeipc.events import EventType, OrderEvent


@dataclass
class LayeringConfig:
    """Tunable parameters for LayeringDetector."""

    qty_threshold: int = 1000
    """Minimum quantity for a large order."""
    window_ns: int = 500_000_000
    """Rolling window over which large orders are counted."""
    count_threshold: int = 3
    """Alert when the count in the window exceeds this value."""
    max_symbols: int = 64
    """Capacity of the symbol table; must be a power of two."""


class LayeringDetector:
    """Fires when more than ``count_threshold`` large orders land on the same side
    of a symbol within ``window_ns``.

    At most ``MAX_PER_SIDE`` timestamps are kept per side; the count restarts
    after each alert.
    """

    MAX_PER_SIDE = 8

    def __init__(self, config: LayeringConfig | None = None) -> None:
        cfg = config if config is not None else LayeringConfig()
        if cfg.max_symbols < 1 or cfg.max_symbols & (cfg.max_symbols - 1):
            raise ValueError(f"max_symbols must be a power of two, got {cfg.max_symbols}")
        self.config = cfg
        self._table: dict[int, dict[bool, deque[int]]] = {}
        self._alerts_fired = 0

    @property
    def alerts_fired(self) -> int:
        return self._alerts_fired

    def _sides(self, symbol_id: int) -> dict[bool, deque[int]] | None:
        sides = self._table.get(symbol_id)
        if sides is None:
            if len(self._table) >= self.config.max_symbols:
                return None
            sides = self._table[symbol_id] = {
                True: deque(maxlen=self.MAX_PER_SIDE),
                False: deque(maxlen=self.MAX_PER_SIDE),
            }
        return sides

    def process(self, event: OrderEvent, now_ns: int | None = None) -> LayeringAlert | None:
        """Feed one event; return a LayeringAlert if it completes a layering pattern."""
        if event.type is not EventType.ADD or event.qty < self.config.qty_threshold:
            return None
        now = time.monotonic_ns() if now_ns is None else now_ns
        sides = self._sides(event.symbol_id)
        if sides is None:
            return None
        times = sides[event.is_bid]
        while times and now - times[0] > self.config.window_ns:
            times.popleft()
        times.append(now)
        if len(times) <= self.config.count_threshold:
            return None
        alert = LayeringAlert(
            symbol_id=event.symbol_id,
            is_bid=event.is_bid,
            order_count=len(times),
            window_start_ns=times[0],
            triggered_ns=now,
        )
        times.clear()
        self._alerts_fired += 1
        return alert

    def reset(self) -> None:
        self._table.clear()
        self._alerts_fired = 0