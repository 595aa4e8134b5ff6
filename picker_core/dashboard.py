# picker_core/dashboard.py
from __future__ import annotations
from typing import Dict, List

import pandas as pd

from .fairness import check_evenness
from .models import AttemptStats, PairStats, Player
from .slots import ParticipationCounters, total_count


def slot_fairness_df(players: List[Player], counters: ParticipationCounters) -> pd.DataFrame:
    """
    One row per player, one column per slot seen in the counters, plus a
    total. `flag_uneven` marks players in a slot whose spread exceeds 1.
    """
    slots = sorted({s for per_slot in counters.values() for s in per_slot})
    rows = []
    for p in players:
        row = {"player_id": p.id, "name": p.name, "role": p.role}
        for s in slots:
            row[f"slot_{s}"] = counters.get(p.id, {}).get(s, 0)
        row["total"] = total_count(counters, p.id)
        rows.append(row)
    df = pd.DataFrame(rows, columns=["player_id", "name", "role"] + [f"slot_{s}" for s in slots] + ["total"])

    uneven = pd.Series(False, index=df.index)
    for s in slots:
        col = df[f"slot_{s}"]
        if not check_evenness(col.tolist()):
            uneven |= col > col.min() + 1
    df["flag_uneven"] = uneven
    return df.sort_values(["total", "name"], ascending=[True, True]).reset_index(drop=True)


def pair_stats_df(players: List[Player], stats: Dict[str, PairStats]) -> pd.DataFrame:
    names = {p.id: p.name for p in players}
    rows = []
    for p in players:
        st = stats.get(p.id) or PairStats()
        rows.append({
            "player_id": p.id,
            "name": p.name,
            "turns": st.total_turns,
            "offense": st.offense_count,
            "defense": st.defense_count,
            "makes": st.makes,
            "stops": st.stops,
            "last_opponent": names.get(st.last_opponent_id, "") if st.last_opponent_id else "",
        })
    df = pd.DataFrame(rows, columns=["player_id", "name", "turns", "offense", "defense", "makes", "stops", "last_opponent"])
    return df.sort_values(["turns", "makes", "name"], ascending=[True, False, True]).reset_index(drop=True)


def attempt_stats_df(players: List[Player], stats: Dict[str, AttemptStats], order: List[str]) -> pd.DataFrame:
    """Rotation table in turn order; players outside the order go last."""
    position = {pid: i for i, pid in enumerate(order)}
    rows = []
    for p in players:
        st = stats.get(p.id) or AttemptStats()
        rows.append({
            "player_id": p.id,
            "name": p.name,
            "up_next": position.get(p.id, len(order)) + 1,
            "attempts": st.attempts,
            "successes": st.successes,
            "pct": round(100.0 * st.pct, 1),
        })
    df = pd.DataFrame(rows, columns=["player_id", "name", "up_next", "attempts", "successes", "pct"])
    return df.sort_values(["up_next", "name"]).reset_index(drop=True)
