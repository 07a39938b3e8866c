"""Lightweight call counters for the hot paths."""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Iterator

TRACKED = ("lore_parse", "player_stat_calc", "combat_calc", "stat_update_task")


class PluginMetrics:
    """Call count and accumulated nanoseconds per tracked operation."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {name: 0 for name in TRACKED}
        self._nanos: dict[str, int] = {name: 0 for name in TRACKED}

    def record(self, name: str, nanos: int) -> None:
        with self._lock:
            self._counts[name] = self._counts.get(name, 0) + 1
            self._nanos[name] = self._nanos.get(name, 0) + nanos

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self.record(name, time.perf_counter_ns() - start)

    def count(self, name: str) -> int:
        return self._counts.get(name, 0)

    def avg_millis(self, name: str) -> float:
        with self._lock:
            count = self._counts.get(name, 0)
            nanos = self._nanos.get(name, 0)
        if count <= 0:
            return 0.0
        return (nanos / 1_000_000.0) / count

    def snapshot(self) -> str:
        with self._lock:
            names = list(self._counts)
        parts = []
        for name in names:
            parts.append(f"{name}_count={self.count(name)}")
            parts.append(f"{name}_avg_ms={self.avg_millis(name):.3f}")
        return "PluginMetrics{" + ", ".join(parts) + "}"
