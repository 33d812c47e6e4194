"""Deadline watchdog for detecting stalled threads."""

from __future__ import annotations

import time

_NS_PER_MS = 1_000_000
_MAX_TIMEOUT_MS = 0xFFFFFFFF


class Watchdog:
    """Reports whether ``kick`` was called within the last ``timeout_ms`` milliseconds.

    The monitored thread calls :meth:`kick`; a supervisor calls :meth:`is_alive`.
    Both may run on different threads.
    """

    def __init__(self, timeout_ms: int) -> None:
        if not 0 <= timeout_ms <= _MAX_TIMEOUT_MS:
            raise ValueError(f"timeout_ms must be a 32-bit unsigned value, got {timeout_ms}")
        self._timeout_ns = int(timeout_ms) * _NS_PER_MS
        self._last_kick_ns = time.monotonic_ns()

    @property
    def timeout_ns(self) -> int:
        return self._timeout_ns

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ns // _NS_PER_MS

    def kick(self) -> None:
        """Reset the deadline."""
        self._last_kick_ns = time.monotonic_ns()

    def is_alive(self) -> bool:
        """True if the last kick (or construction) lies within the timeout."""
        return self.elapsed_ns() < self._timeout_ns

    def elapsed_ns(self) -> int:
        """Nanoseconds since the last kick, or since construction."""
        return max(0, time.monotonic_ns() - self._last_kick_ns)