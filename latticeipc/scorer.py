"""Per-symbol suspicion scores with exponential decay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScorerConfig:
    """Tunable parameters for SymbolScorer."""

    max_symbols: int = 256
    """Capacity of the symbol table; must be a power of two."""
    half_life_ns: float = 5e9
    """Score half-life in nanoseconds."""
    alert_increment: float = 0.2
    """Score added per alert; the score is clamped to 1.0."""


@dataclass
class _Entry:
    score: float
    last_update_ns: int


class SymbolScorer:
    """Tracks a suspicion score in [0.0, 1.0] for each symbol.

    Each alert adds ``alert_increment`` after the existing score has decayed
    with the configured half-life. At most ``max_symbols`` symbols are
    tracked; alerts for further symbols are dropped.
    """

    def __init__(self, config: ScorerConfig | None = None) -> None:
        cfg = config if config is not None else ScorerConfig()
        if cfg.max_symbols < 1 or cfg.max_symbols & (cfg.max_symbols - 1):
            raise ValueError(f"max_symbols must be a power of two, got {cfg.max_symbols}")
        if cfg.half_life_ns <= 0:
            raise ValueError(f"half_life_ns must be positive, got {cfg.half_life_ns}")
        self.config = cfg
        self._table: dict[int, _Entry] = {}

    def _decayed(self, entry: _Entry, now_ns: int) -> float:
        elapsed = max(0, now_ns - entry.last_update_ns)
        return entry.score * 0.5 ** (elapsed / self.config.half_life_ns)

    def record_alert(self, symbol_id: int, now_ns: int) -> None:
        """Decay the symbol's score to ``now_ns`` and bump it by one alert."""
        entry = self._table.get(symbol_id)
        if entry is None:
            if len(self._table) >= self.config.max_symbols:
                return
            entry = self._table[symbol_id] = _Entry(0.0, now_ns)
        entry.score = min(1.0, self._decayed(entry, now_ns) + self.config.alert_increment)
        entry.last_update_ns = now_ns

    def score(self, symbol_id: int, now_ns: int) -> float:
        """Current decayed score, or 0.0 for a symbol never seen."""
        entry = self._table.get(symbol_id)
        if entry is None:
            return 0.0
        return self._decayed(entry, now_ns)

    def reset(self) -> None:
        self._table.clear()