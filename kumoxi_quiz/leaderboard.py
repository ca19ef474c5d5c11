"""
leaderboard.py
=====================================

The Hall of Fame: load / save / clear over a KeyValueStore, plus the pure
update rule.

Stored value (one key, JSON array):

[
  {"name": "Ana", "score": 7, "total": 7, "category": "Angola Tech", "date": "19/10/2026"},
  ...
]

Update rule:
    append the new entry -> sort by score descending (stable) -> keep top N
Entries with the same score keep their insertion order; name and date are
never used as tie-breakers.
"""

from __future__ import annotations

import json
import logging
from typing import List, Sequence

from .models import LeaderboardEntry
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "kumoxi_quiz_leaderboard"
DEFAULT_LIMIT = 10


# ---------------------------------------------------------
# Pure update rule
# ---------------------------------------------------------
def insert_entry(
    entries: Sequence[LeaderboardEntry],
    entry: LeaderboardEntry,
    limit: int = DEFAULT_LIMIT,
) -> List[LeaderboardEntry]:
    """Return a new list with `entry` ranked in and the tail cut at `limit`."""
    ranked = sorted([*entries, entry], key=lambda e: e.score, reverse=True)
    return ranked[: max(limit, 0)]


class LeaderboardStore:
    """
    Persists the leaderboard under a single key of a KeyValueStore.

    Reads never raise: missing or malformed data is an empty leaderboard.
    Writes are a single best-effort attempt; failures are logged and
    reported through the return value.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_KEY,
        limit: int = DEFAULT_LIMIT,
    ):
        self.store = store
        self.key = key
        self.limit = limit

    # ---------------------------------------------------------
    # Load
    # ---------------------------------------------------------
    def load(self) -> List[LeaderboardEntry]:
        try:
            raw = self.store.get(self.key)
        except OSError as e:
            logger.warning(f"Could not read leaderboard '{self.key}': {e}")
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Malformed leaderboard data under '{self.key}': {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Leaderboard under '{self.key}' is not a list; ignoring it")
            return []

        entries: List[LeaderboardEntry] = []
        for i, item in enumerate(data):
            try:
                entries.append(LeaderboardEntry.from_dict(item))
            except ValueError as e:
                logger.warning(f"Dropping leaderboard row {i}: {e}")

        # hand-edited or oversized lists are re-ranked and cut like any update
        ranked = sorted(entries, key=lambda e: e.score, reverse=True)
        return ranked[: max(self.limit, 0)]

    # ---------------------------------------------------------
    # Save / clear
    # ---------------------------------------------------------
    def save(self, entries: Sequence[LeaderboardEntry]) -> bool:
        """Write the full list in one set() call. Returns False on failure."""
        payload = json.dumps([e.to_dict() for e in entries], ensure_ascii=False)
        try:
            self.store.set(self.key, payload)
        except OSError as e:
            logger.error(f"Failed to persist leaderboard '{self.key}': {e}")
            return False
        return True

    def clear(self) -> bool:
        try:
            self.store.delete(self.key)
        except OSError as e:
            logger.error(f"Failed to clear leaderboard '{self.key}': {e}")
            return False
        logger.info(f"Leaderboard '{self.key}' cleared")
        return True

    def record(self, entry: LeaderboardEntry) -> List[LeaderboardEntry]:
        """
        Rank `entry` into the currently persisted list, write it back and
        return it. Re-reading first keeps entries written by other sessions
        sharing the store. The returned list is correct even if the write
        failed.
        """
        updated = insert_entry(self.load(), entry, self.limit)
        self.save(updated)
        return updated
