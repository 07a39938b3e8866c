"""In-memory cache of each player's latest computed stats."""
from __future__ import annotations

import threading
from typing import Callable

from lore_stats.models.player_stats import PlayerStats


class StatCache:
    """Thread-safe player id -> PlayerStats map.

    Values are immutable, so a reader sees either the old or the new bundle.
    Writes for one player (``put``, ``update``, ``remove``) are serialized on
    that player's own lock. Locks outlive their entries.
    """

    def __init__(self) -> None:
        self._entries: dict[str, PlayerStats] = {}
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, player_id: str) -> threading.Lock:
        lock = self._locks.get(player_id)
        if lock is None:
            lock = self._locks.setdefault(player_id, threading.Lock())
        return lock

    def put(self, stats: PlayerStats | None) -> None:
        if stats is None:
            return
        with self._lock_for(stats.player_id):
            self._entries[stats.player_id] = stats

    def get(self, player_id: str) -> PlayerStats | None:
        return self._entries.get(player_id)

    def get_or_empty(self, player_id: str) -> PlayerStats:
        stats = self._entries.get(player_id)
        return stats if stats is not None else PlayerStats.empty(player_id)

    def update(self, player_id: str, fn: Callable[[PlayerStats], PlayerStats]) -> PlayerStats:
        """Apply ``fn`` to the current (or empty) entry and store the result atomically for this player."""
        with self._lock_for(player_id):
            new_stats = fn(self.get_or_empty(player_id))
            self._entries[player_id] = new_stats
            return new_stats

    def remove(self, player_id: str) -> PlayerStats | None:
        with self._lock_for(player_id):
            return self._entries.pop(player_id, None)

    def contains(self, player_id: str) -> bool:
        return player_id in self._entries

    def clear(self) -> None:
        for player_id in list(self._entries):
            self.remove(player_id)

    def snapshot(self) -> dict[str, PlayerStats]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._entries
