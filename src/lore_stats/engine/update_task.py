"""Periodic sweep that recomputes every online player's stats."""
from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable, Iterable

from lore_stats.models.item import EquipmentSnapshot
from lore_stats.systems.aggregation import HealthHolder

if TYPE_CHECKING:
    from lore_stats.app import LoreStatsApp

logger = logging.getLogger(__name__)

SLOW_SWEEP_NANOS = 10_000_000
TICK_SECONDS = 0.05

OnlinePlayer = tuple[EquipmentSnapshot, "HealthHolder | None"]
PlayersProvider = Callable[[], Iterable[OnlinePlayer]]


class StatUpdateTask:
    """One ``run()`` is one sweep; ``start()`` repeats it on a daemon thread."""

    def __init__(self, app: LoreStatsApp, players: PlayersProvider):
        self.app = app
        self.players = players
        self.ticks = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def run(self) -> int:
        """Recompute and publish each player's stats. Returns players updated."""
        runtime = self.app.runtime
        start = time.perf_counter_ns()
        updated = 0
        for snapshot, health in self.players():
            if self._stop.is_set():
                break
            try:
                runtime.aggregation.recompute_and_publish(snapshot, health)
                updated += 1
            except Exception:
                logger.exception("Stat sweep failed for %s", snapshot.player_id)

        nanos = time.perf_counter_ns() - start
        self.app.metrics.record("stat_update_task", nanos)
        if runtime.settings.debug and nanos > SLOW_SWEEP_NANOS:
            logger.info("[Debug] stat update took %.3fms for %d players", nanos / 1_000_000.0, updated)
        return updated

    def tick(self) -> None:
        """Advance one game tick, sweeping every ``update_interval`` ticks."""
        settings = self.app.runtime.settings
        self.ticks += 1
        if self.ticks % settings.update_interval == 0:
            self.run()
        if settings.debug and self.ticks % settings.metrics_log_interval == 0:
            logger.info("[Metrics] %s", self.app.metrics.snapshot())

    # -- Background thread --

    def start(self, tick_seconds: float = TICK_SECONDS) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, args=(tick_seconds,), name="lore-stats-sweep", daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _loop(self, tick_seconds: float) -> None:
        while not self._stop.wait(tick_seconds):
            try:
                self.tick()
            except Exception:
                logger.exception("Stat sweep tick failed")
