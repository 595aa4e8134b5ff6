from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .errors import OutcomeWithoutAttempt, UnknownPlayer
from .models import AttemptStats, Player

logger = logging.getLogger(__name__)

# player id -> one-at-a-time drill stats
AttemptStatsMap = Dict[str, AttemptStats]


class RotationQueue:
    """
    Move-to-back turn order for a repeated one-at-a-time drill. Whoever just
    went waits until everyone else currently in the order has had a turn.

    The initial order is roster insertion order; players joining later are
    appended in roster order.
    """

    def __init__(self, order: Optional[Iterable[str]] = None):
        self._order: List[str] = []
        # ids with an attempt counted but no outcome yet
        self._open: Set[str] = set()
        for pid in order or []:
            if pid not in self._order:
                self._order.append(pid)

    @classmethod
    def from_players(cls, active: Sequence[Player]) -> "RotationQueue":
        return cls(p.id for p in active)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._order

    def peek_order(self) -> List[str]:
        return list(self._order)

    def current(self) -> Optional[str]:
        return self._order[0] if self._order else None

    def sync(self, active: Sequence[Player]) -> None:
        """Drop ids no longer active, append new or reactivated ones."""
        active_ids = [p.id for p in active]
        keep = set(active_ids)
        order = [pid for pid in self._order if pid in keep]
        present = set(order)
        order += [pid for pid in active_ids if pid not in present]
        self._open &= keep
        if order != self._order:
            logger.debug("rotation synced: %d -> %d player(s)", len(self._order), len(order))
        self._order = order

    def clear_open(self) -> None:
        self._open.clear()

    def record_attempt(self, player_id: str, stats: AttemptStatsMap) -> AttemptStats:
        """Count the attempt as soon as the player is up; order is unchanged."""
        if player_id not in self._order:
            raise UnknownPlayer(player_id)
        st = stats.setdefault(player_id, AttemptStats())
        st.attempts += 1
        self._open.add(player_id)
        return st

    def record_outcome(self, player_id: str, success: bool, stats: AttemptStatsMap) -> AttemptStats:
        """Resolve the player's open attempt and move them to the back."""
        if player_id not in self._order:
            raise UnknownPlayer(player_id)
        if player_id not in self._open:
            raise OutcomeWithoutAttempt(f"No open attempt for {player_id}.")
        self._open.discard(player_id)
        st = stats.setdefault(player_id, AttemptStats())
        if success:
            st.successes += 1
        self._order.remove(player_id)
        self._order.append(player_id)
        logger.info("outcome %s success=%s; moved to back", player_id, success)
        return st


def reset_attempt_stats(stats: AttemptStatsMap) -> None:
    stats.clear()
    logger.info("attempt stats reset")
