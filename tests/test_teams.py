# FILE: tests/test_teams.py
import pytest

from picker_core.engine_test_helpers import quick_roster
from picker_core.errors import InsufficientPlayers
from picker_core.fairness import make_rng
from picker_core.teams import assign_flex_roles, balance, distribute_role

QUOTAS = {"Guard": 3, "Forward": 2}


def _check_shape(result, active):
    for team in (result.team_a, result.team_b):
        assert len(team.slots["Guard"]) == 3
        assert len(team.slots["Forward"]) == 2
        for role, members in team.slots.items():
            assert all(m.role == role for m in members)
    real = result.assigned_ids()
    assert len(real) == len(set(real))
    assert sorted(real + [p.id for p in result.sitting_out]) == sorted(p.id for p in active)


def test_eight_players_fill_with_two_coaches():
    active = quick_roster(
        [("g1", "Guard"), ("g2", "Guard"), ("g3", "Guard"), ("g4", "Guard"),
         ("x1", "Flex"), ("x2", "Flex"), ("f1", "Forward"), ("f2", "Forward")]
    )
    for seed in range(40):
        result = balance(active, QUOTAS, make_rng(seed))
        _check_shape(result, active)
        assert result.sitting_out == []
        assert result.placeholder_count() == 2


def test_overflow_sits_out_and_missing_role_is_coached():
    active = quick_roster([(f"g{i}", "Guard") for i in range(8)])
    result = balance(active, QUOTAS, make_rng(3))
    _check_shape(result, active)
    assert len(result.sitting_out) == 2
    for team in (result.team_a, result.team_b):
        assert all(m.is_placeholder and m.name == "Coach" for m in team.slots["Forward"])
        assert not any(m.is_placeholder for m in team.slots["Guard"])


def test_surplus_flex_players_overflow():
    active = quick_roster(
        [(f"g{i}", "Guard") for i in range(6)]
        + [(f"f{i}", "Forward") for i in range(4)]
        + [("x1", "Flex"), ("x2", "Flex")]
    )
    for seed in range(10):
        result = balance(active, QUOTAS, make_rng(seed))
        _check_shape(result, active)
        assert result.placeholder_count() == 0
        assert len(result.sitting_out) == 2


def test_flex_covers_the_larger_deficit_first():
    fixed = {"Guard": quick_roster([("g1", "Guard")] * 1), "Forward": quick_roster([("f1", "Forward")] * 4)}
    flex = quick_roster([("x1", "Flex"), ("x2", "Flex")])
    groups = assign_flex_roles(fixed, flex, QUOTAS, make_rng(0))
    assert sorted(p.id for p in groups["Guard"]) == ["g1", "x1", "x2"]
    assert len(fixed["Guard"]) == 1  # input untouched


def test_distribute_role_fills_the_open_team():
    players = quick_roster([(f"g{i}", "Guard") for i in range(4)])
    a, b, over = distribute_role(players, 3, make_rng(8))
    assert len(a) + len(b) == 4
    assert len(a) <= 3 and len(b) <= 3
    assert over == []


def test_no_players_is_insufficient():
    with pytest.raises(InsufficientPlayers):
        balance([], QUOTAS, make_rng(0))
