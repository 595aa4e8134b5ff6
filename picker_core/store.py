"""
Key-value record store plus the roster and stats views the engine reads
from and writes back to. Each put is a whole-record write.
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
import uuid
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Dict, List, Optional

from .constants import (
    ATTEMPT_STATS_KEY, PAIR_STATS_KEY, PLAYERS_KEY, SLOT_COUNTERS_KEY, normalize_name, normalize_role,
)
from .errors import UnknownPlayer
from .models import AttemptStats, PairStats, Player
from .pairing import PairStatsMap
from .rotation import AttemptStatsMap
from .slots import ParticipationCounters

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class MemoryRecordStore(RecordStore):
    def __init__(self, records: Optional[Dict[str, Any]] = None):
        self._records: Dict[str, Any] = deepcopy(records or {})

    def get(self, key: str, default: Any = None) -> Any:
        return deepcopy(self._records.get(key, default))

    def put(self, key: str, value: Any) -> None:
        self._records[key] = deepcopy(value)

    def delete(self, key: str) -> None:
        self._records.pop(key, None)


class JsonFileRecordStore(RecordStore):
    """All records in one JSON file, rewritten atomically on every put."""

    def __init__(self, path: str):
        self.path = path
        self._records: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            obj = json.load(f)
        if not isinstance(obj, dict):
            raise ValueError(f"Record file {self.path} must hold a JSON object.")
        return obj

    def _flush(self) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=folder, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._records, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return deepcopy(self._records.get(key, default))

    def put(self, key: str, value: Any) -> None:
        self._records[key] = deepcopy(value)
        self._flush()

    def delete(self, key: str) -> None:
        if self._records.pop(key, None) is not None:
            self._flush()


# -----------------------
# Roster
# -----------------------
class RosterStore:
    def __init__(self, records: RecordStore):
        self.records = records

    def load_all_players(self) -> List[Player]:
        rows = self.records.get(PLAYERS_KEY, []) or []
        # older records predate the active flag; treat them as active
        return [Player(**{"active": True, **row}) for row in rows]

    def load_active_players(self) -> List[Player]:
        return [p for p in self.load_all_players() if p.active]

    def replace_players(self, players: List[Player]) -> None:
        self.records.put(PLAYERS_KEY, [p.model_dump() for p in players])

    def get_player(self, player_id: str) -> Player:
        for p in self.load_all_players():
            if p.id == player_id:
                return p
        raise UnknownPlayer(player_id)

    def add_player(self, name: str, role: str = "Flex", player_id: Optional[str] = None) -> Player:
        clean = normalize_name(name)
        if not clean:
            raise ValueError("Please enter a player name")
        players = self.load_all_players()
        pid = player_id or uuid.uuid4().hex[:12]
        if any(p.id == pid for p in players):
            raise ValueError(f"Duplicate player id: {pid}")
        player = Player(id=pid, name=clean, role=normalize_role(role))
        players.append(player)
        self.replace_players(players)
        logger.info("added player %s (%s)", player.name, player.role)
        return player

    def _update(self, player_id: str, **changes) -> Player:
        players = self.load_all_players()
        for i, p in enumerate(players):
            if p.id == player_id:
                players[i] = Player(**{**p.model_dump(), **changes})
                self.replace_players(players)
                return players[i]
        raise UnknownPlayer(player_id)

    def delete_player(self, player_id: str) -> None:
        players = self.load_all_players()
        kept = [p for p in players if p.id != player_id]
        if len(kept) == len(players):
            raise UnknownPlayer(player_id)
        self.replace_players(kept)
        logger.info("deleted player %s", player_id)

    def rename_player(self, player_id: str, name: str) -> Player:
        clean = normalize_name(name)
        if not clean:
            raise ValueError("Please enter a player name")
        return self._update(player_id, name=clean)

    def update_role(self, player_id: str, role: str) -> Player:
        return self._update(player_id, role=normalize_role(role))

    def set_active(self, player_id: str, active: bool) -> Player:
        return self._update(player_id, active=active)

    def toggle_active(self, player_id: str) -> Player:
        return self.set_active(player_id, not self.get_player(player_id).active)


# -----------------------
# Counters
# -----------------------
class StatsStore:
    """Per-player counters, stored as plain nested maps keyed by player id."""

    def __init__(self, records: RecordStore):
        self.records = records

    # --- slotted picker ---
    def load_slot_counters(self) -> ParticipationCounters:
        raw = self.records.get(SLOT_COUNTERS_KEY, {}) or {}
        # JSON object keys are strings; slots are ints in memory
        return {pid: {int(slot): int(n) for slot, n in per_slot.items()} for pid, per_slot in raw.items()}

    def save_slot_counters(self, counters: ParticipationCounters) -> None:
        self.records.put(
            SLOT_COUNTERS_KEY,
            {pid: {str(slot): n for slot, n in per_slot.items()} for pid, per_slot in counters.items()},
        )

    # --- pairing ---
    def load_pair_stats(self) -> PairStatsMap:
        raw = self.records.get(PAIR_STATS_KEY, {}) or {}
        return {pid: PairStats(**row) for pid, row in raw.items()}

    def save_pair_stats(self, stats: PairStatsMap) -> None:
        self.records.put(PAIR_STATS_KEY, {pid: st.model_dump() for pid, st in stats.items()})

    # --- rotation ---
    def load_attempt_stats(self) -> AttemptStatsMap:
        raw = self.records.get(ATTEMPT_STATS_KEY, {}) or {}
        return {pid: AttemptStats(**row) for pid, row in raw.items()}

    def save_attempt_stats(self, stats: AttemptStatsMap) -> None:
        self.records.put(ATTEMPT_STATS_KEY, {pid: st.model_dump() for pid, st in stats.items()})

    def reset_all(self) -> None:
        for key in (SLOT_COUNTERS_KEY, PAIR_STATS_KEY, ATTEMPT_STATS_KEY):
            self.records.delete(key)
        logger.info("all counters reset")
