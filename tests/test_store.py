# FILE: tests/test_store.py
import json

import pytest

from picker_core.errors import UnknownPlayer
from picker_core.models import AttemptStats, PairStats
from picker_core.store import JsonFileRecordStore, MemoryRecordStore, RosterStore, StatsStore


def test_roster_management():
    roster = RosterStore(MemoryRecordStore())
    a = roster.add_player("  Alex   Carter ", "Guard")
    b = roster.add_player("Blake", "Forward")
    assert a.name == "Alex Carter"
    assert [p.id for p in roster.load_all_players()] == [a.id, b.id]

    roster.toggle_active(a.id)
    assert [p.id for p in roster.load_active_players()] == [b.id]
    roster.set_active(a.id, True)
    roster.update_role(b.id, "Flex")
    assert roster.get_player(b.id).role == "Flex"
    assert roster.rename_player(b.id, "Blake D").name == "Blake D"

    roster.delete_player(a.id)
    assert [p.id for p in roster.load_all_players()] == [b.id]


def test_roster_rejects_bad_input():
    roster = RosterStore(MemoryRecordStore())
    with pytest.raises(ValueError):
        roster.add_player("   ")
    with pytest.raises(ValueError):
        roster.add_player("Casey", "Goalie")
    with pytest.raises(UnknownPlayer):
        roster.delete_player("nope")
    with pytest.raises(UnknownPlayer):
        roster.set_active("nope", False)


def test_legacy_players_without_active_flag_load_active():
    records = MemoryRecordStore({"chaos-picker-players": [{"id": "1", "name": "Old", "role": "Guard"}]})
    assert [p.id for p in RosterStore(records).load_active_players()] == ["1"]


def test_memory_store_hands_out_copies():
    records = MemoryRecordStore()
    value = {"a": {"1": 1}}
    records.put("k", value)
    value["a"]["1"] = 99
    got = records.get("k")
    got["a"]["1"] = 42
    assert records.get("k") == {"a": {"1": 1}}


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "sub" / "picker.json"
    records = JsonFileRecordStore(str(path))
    stats = StatsStore(records)
    stats.save_slot_counters({"a": {1: 2, 3: 1}})
    stats.save_pair_stats({"a": PairStats(makes=1, offense_count=1, last_opponent_id="b")})
    stats.save_attempt_stats({"a": AttemptStats(attempts=2, successes=1)})

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["chaos-picker-slot-counters"] == {"a": {"1": 2, "3": 1}}

    reopened = StatsStore(JsonFileRecordStore(str(path)))
    assert reopened.load_slot_counters() == {"a": {1: 2, 3: 1}}
    assert reopened.load_pair_stats()["a"].last_opponent_id == "b"
    assert reopened.load_attempt_stats()["a"].successes == 1

    reopened.reset_all()
    assert reopened.load_slot_counters() == {}
    assert StatsStore(JsonFileRecordStore(str(path))).load_pair_stats() == {}


def test_json_file_store_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonFileRecordStore(str(path))
