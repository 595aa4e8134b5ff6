# FILE: tests/test_fairness.py
from collections import Counter

from picker_core.fairness import (
    FEWEST, MOST, check_evenness, lowest_tier, make_rng, shuffle, tie_break_order,
)


def test_evenness_true_and_false():
    assert check_evenness([2, 2, 3, 2])
    assert not check_evenness([1, 5, 1, 1])
    assert check_evenness([])


def test_shuffle_is_a_copy_and_a_permutation():
    items = list(range(10))
    out = shuffle(items, make_rng(3))
    assert items == list(range(10))
    assert sorted(out) == items


def test_shuffle_is_reproducible_with_a_seed():
    assert shuffle("abcdef", make_rng(7)) == shuffle("abcdef", make_rng(7))


def test_shuffle_reaches_every_position():
    rng = make_rng(11)
    firsts = Counter(shuffle("abc", rng)[0] for _ in range(3000))
    for ch in "abc":
        assert 800 < firsts[ch] < 1200


def test_lowest_tier_returns_all_minimum_items():
    counts = {"a": 0, "b": 2, "c": 0, "d": 1}
    assert lowest_tier(list(counts), lambda k: counts[k]) == ["a", "c"]
    assert lowest_tier([], lambda k: 0) == []


def test_tie_break_falls_through_only_on_equality():
    rows = {"a": (2, 5), "b": (3, 0), "c": (2, 1)}
    criteria = [(lambda k: rows[k][0], MOST), (lambda k: rows[k][1], FEWEST)]
    assert tie_break_order(list(rows), criteria) == ["b", "c", "a"]


def test_full_ties_keep_input_order_without_rng_and_vary_with_rng():
    criteria = [(lambda k: 0, MOST)]
    assert tie_break_order(["x", "y", "z"], criteria) == ["x", "y", "z"]
    rng = make_rng(5)
    heads = {tie_break_order(["x", "y", "z"], criteria, rng)[0] for _ in range(200)}
    assert heads == {"x", "y", "z"}
