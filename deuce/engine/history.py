"""
History ledger — LIFO stack of full match snapshots backing undo and
post-match statistics.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterator, Optional

from deuce.models.match import MatchState

logger = logging.getLogger(__name__)


class HistoryLedger:
    """
    Snapshots of a match taken immediately before each scored point.

    Every snapshot is an independent deep copy; later mutations of the live
    match never reach it. The ledger lives beside the match state rather than
    inside it, so restoring a snapshot never drags a nested history along.
    """

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self._items: list[MatchState] = []

    def push(self, match: MatchState) -> None:
        self._items.append(copy.deepcopy(match))
        if self.limit is not None and len(self._items) > self.limit:
            dropped = len(self._items) - self.limit
            self._items = self._items[dropped:]
            logger.warning(
                "History limit %d reached, dropped %d oldest snapshot(s); statistics will be partial",
                self.limit, dropped,
            )

    def pop(self) -> Optional[MatchState]:
        """Remove and return the newest snapshot, or None when empty."""
        if not self._items:
            return None
        return self._items.pop()

    def __iter__(self) -> Iterator[MatchState]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
