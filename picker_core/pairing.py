from __future__ import annotations
import logging
from typing import Dict, List, Sequence

import numpy as np

from .errors import InsufficientPlayers
from .fairness import FEWEST, MOST, lowest_tier, top_of_ladder
from .models import PairStats, Pairing, Player

logger = logging.getLogger(__name__)

# player id -> rolling live-drill stats
PairStatsMap = Dict[str, PairStats]


def stats_for(stats: PairStatsMap, player_id: str) -> PairStats:
    """Read-only view; missing players count as all zeros."""
    return stats.get(player_id) or PairStats()


def _performance_ladder(stats: PairStatsMap):
    # most makes -> most offense turns -> most stops
    return [
        (lambda p: stats_for(stats, p.id).makes, MOST),
        (lambda p: stats_for(stats, p.id).offense_count, MOST),
        (lambda p: stats_for(stats, p.id).stops, MOST),
    ]


def _reversed_ladder(stats: PairStatsMap):
    # most defense turns -> fewest stops -> fewest makes
    return [
        (lambda p: stats_for(stats, p.id).defense_count, MOST),
        (lambda p: stats_for(stats, p.id).stops, FEWEST),
        (lambda p: stats_for(stats, p.id).makes, FEWEST),
    ]


def is_repeat_opponent(a: Player, b: Player, stats: PairStatsMap) -> bool:
    return (
        stats_for(stats, a.id).last_opponent_id == b.id
        or stats_for(stats, b.id).last_opponent_id == a.id
    )


def _opponents(pool: Sequence[Player], player1: Player, stats: PairStatsMap, no_repeat: bool) -> List[Player]:
    out = [p for p in pool if p.id != player1.id]
    if no_repeat:
        out = [p for p in out if not is_repeat_opponent(player1, p, stats)]
    return out


def select_pair(
    active: Sequence[Player],
    stats: PairStatsMap,
    rng: np.random.Generator,
) -> Pairing:
    """
    Pick an offense/defense pair for a live drill from the players with the
    fewest turns. Never mutates stats.
    """
    if len(active) < 2:
        raise InsufficientPlayers(2, len(active))

    eligible = lowest_tier(active, lambda p: stats_for(stats, p.id).total_turns)
    player1 = top_of_ladder(eligible, _performance_ladder(stats), rng)

    candidates = _opponents(eligible, player1, stats, no_repeat=True)
    if candidates:
        # next-best performer in the same tier, no random tie-break
        player2 = top_of_ladder(candidates, _performance_ladder(stats))
        widened = False
    else:
        candidates = (
            _opponents(active, player1, stats, no_repeat=True)
            or _opponents(active, player1, stats, no_repeat=False)
        )
        player2 = top_of_ladder(candidates, _reversed_ladder(stats), rng)
        widened = True

    logger.debug("select_pair %s vs %s (widened=%s)", player1.id, player2.id, widened)
    return Pairing(offense=player1, defense=player2, widened=widened)


def _record(offense_id: str, defense_id: str, stats: PairStatsMap) -> None:
    off = stats.setdefault(offense_id, PairStats())
    dfn = stats.setdefault(defense_id, PairStats())
    off.offense_count += 1
    dfn.defense_count += 1
    off.last_opponent_id = defense_id
    dfn.last_opponent_id = offense_id


def record_make(offense_id: str, defense_id: str, stats: PairStatsMap) -> None:
    if offense_id == defense_id:
        raise ValueError("a player cannot face themselves")
    _record(offense_id, defense_id, stats)
    stats[offense_id].makes += 1
    logger.info("make: %s over %s", offense_id, defense_id)


def record_miss(offense_id: str, defense_id: str, stats: PairStatsMap) -> None:
    if offense_id == defense_id:
        raise ValueError("a player cannot face themselves")
    _record(offense_id, defense_id, stats)
    stats[defense_id].stops += 1
    logger.info("stop: %s on %s", defense_id, offense_id)


def reset_pair_stats(stats: PairStatsMap) -> None:
    stats.clear()
    logger.info("pair stats reset")
