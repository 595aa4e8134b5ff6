"""
Internal helpers for tests (not imported by the package).
"""
from __future__ import annotations
from typing import List, Tuple

from .models import Player
from .store import MemoryRecordStore, RosterStore


def quick_player(pid: str, name: str = "", role: str = "Flex", active: bool = True) -> Player:
    return Player(id=pid, name=name or pid.upper(), role=role, active=active)


def quick_roster(spec: List[Tuple[str, str]]) -> List[Player]:
    """[(id, role), ...] -> players named after their ids."""
    return [quick_player(pid, role=role) for pid, role in spec]


def seeded_records(players: List[Player]) -> MemoryRecordStore:
    records = MemoryRecordStore()
    RosterStore(records).replace_players(players)
    return records
