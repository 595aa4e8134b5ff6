# FILE: picker_core/fairness.py
"""
Shared fairness primitives: tiering, tie-break ladders and the single
randomness source (a numpy Generator) every selector draws from.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")

MOST = "desc"
FEWEST = "asc"

Criterion = Tuple[Callable[[T], int], str]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


# -----------------------
# Uniform draws
# -----------------------
def random_index(n: int, rng: np.random.Generator) -> int:
    """Uniform index in [0, n)."""
    if n <= 0:
        raise ValueError("random_index needs n >= 1")
    return int(rng.integers(0, n))


def coin_flip(rng: np.random.Generator) -> bool:
    return random_index(2, rng) == 0


def pick_one(items: Sequence[T], rng: np.random.Generator) -> T:
    if not items:
        raise ValueError("pick_one from an empty sequence")
    return items[random_index(len(items), rng)]


def shuffle(items: Sequence[T], rng: np.random.Generator) -> List[T]:
    """
    Fisher-Yates over a fresh copy: for i from the last index down to 1,
    swap i with a uniform j <= i. The input sequence is left untouched.
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = random_index(i + 1, rng)
        out[i], out[j] = out[j], out[i]
    return out


# -----------------------
# Tiers & ladders
# -----------------------
def group_by_key(items: Sequence[T], key: Callable[[T], int]) -> Dict[int, List[T]]:
    groups: Dict[int, List[T]] = {}
    for it in items:
        groups.setdefault(int(key(it)), []).append(it)
    return groups


def lowest_tier(items: Sequence[T], key: Callable[[T], int]) -> List[T]:
    """Items sharing the minimum key value, in input order."""
    groups = group_by_key(items, key)
    if not groups:
        return []
    return groups[min(groups)]


def tie_break_order(
    items: Sequence[T],
    criteria: Sequence[Criterion],
    rng: Optional[np.random.Generator] = None,
) -> List[T]:
    """
    Order items by (metric, direction) pairs; a later criterion only matters
    when every earlier one is exactly equal. Items tied on all criteria come
    out in uniformly random order when rng is given, else in input order.
    """
    pool = shuffle(items, rng) if rng is not None else list(items)

    def ladder_key(it: T) -> Tuple[int, ...]:
        return tuple(-int(metric(it)) if direction == MOST else int(metric(it))
                     for metric, direction in criteria)

    # sorted() is stable, so the shuffle above decides full ties
    return sorted(pool, key=ladder_key)


def top_of_ladder(
    items: Sequence[T],
    criteria: Sequence[Criterion],
    rng: Optional[np.random.Generator] = None,
) -> T:
    if not items:
        raise ValueError("top_of_ladder on an empty group")
    return tie_break_order(items, criteria, rng)[0]


# -----------------------
# Evenness checks
# -----------------------
def check_evenness(counts: List[int]) -> bool:
    return not counts or (max(counts) - min(counts) <= 1)

