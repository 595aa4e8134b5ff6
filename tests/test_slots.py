# FILE: tests/test_slots.py
from collections import Counter

import pytest

from picker_core.engine_test_helpers import quick_player, quick_roster
from picker_core.errors import InsufficientPlayers, InvalidSlotCount
from picker_core.fairness import make_rng
from picker_core.slots import (
    confirm_slots, draw_tiered, reset_slot_counters, select_slots, total_count,
)


def _five():
    return quick_roster([(pid, "Flex") for pid in "abcde"])


def test_lowest_slot_tier_wins_about_evenly():
    players = [quick_player("a"), quick_player("b"), quick_player("c")]
    counters = {"a": {1: 0}, "c": {1: 2}}
    rng = make_rng(1)
    picks = Counter(select_slots(players, 1, counters, rng)[0].player.id for _ in range(2000))
    assert picks["c"] == 0
    assert 850 < picks["a"] < 1150
    assert picks["a"] + picks["b"] == 2000


def test_slots_are_numbered_and_players_unique():
    sel = select_slots(_five(), 4, {}, make_rng(2))
    assert [p.slot for p in sel] == [1, 2, 3, 4]
    assert len({p.player.id for p in sel}) == 4


def test_more_slots_than_players_degrades_gracefully():
    sel = select_slots(_five(), 9, {}, make_rng(2))
    assert len(sel) == 5


def test_zero_slots_is_empty_and_negative_is_rejected():
    assert select_slots(_five(), 0, {}, make_rng(2)) == []
    with pytest.raises(InvalidSlotCount):
        select_slots(_five(), -1, {}, make_rng(2))


def test_empty_roster_is_insufficient():
    with pytest.raises(InsufficientPlayers):
        select_slots([], 2, {}, make_rng(2))


def test_per_slot_counter_decides_not_total():
    players = [quick_player("a"), quick_player("b")]
    # a leads overall but has never had slot 2
    counters = {"a": {1: 5, 2: 0}, "b": {1: 0, 2: 1}}
    rng = make_rng(4)
    for _ in range(20):
        sel = select_slots(players, 2, counters, rng)
        assert sel[0].player.id == "b"
        assert sel[1].player.id == "a"


def test_confirm_then_reset():
    counters = {}
    sel = select_slots(_five(), 2, counters, make_rng(9))
    assert counters == {}  # drawing alone never counts
    touched = confirm_slots(sel, counters)
    assert touched == [p.player.id for p in sel]
    assert counters[sel[0].player.id][1] == 1
    assert counters[sel[1].player.id][2] == 1
    reset_slot_counters(counters)
    assert counters == {}


def test_first_slot_spread_never_exceeds_one():
    players = _five()
    counters = {}
    rng = make_rng(21)
    for _ in range(60):
        confirm_slots(select_slots(players, 2, counters, rng), counters)
        firsts = [counters.get(p.id, {}).get(1, 0) for p in players]
        assert max(firsts) - min(firsts) <= 1


def test_tiered_draw_takes_whole_low_tiers_first():
    players = _five()
    counters = {"a": {1: 1}, "b": {2: 1}, "c": {1: 2}, "d": {}, "e": {}}
    rng = make_rng(6)
    for _ in range(30):
        ids = [p.player.id for p in draw_tiered(players, 3, counters, rng)]
        assert set(ids[:2]) == {"d", "e"}
        assert ids[2] in {"a", "b"}
    assert total_count(counters, "c") == 2
