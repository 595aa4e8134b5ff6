from __future__ import annotations
import logging
from typing import Dict, List, Sequence

import numpy as np

from .errors import InsufficientPlayers, InvalidSlotCount
from .fairness import group_by_key, lowest_tier, pick_one, shuffle
from .models import Player, SlotPick

logger = logging.getLogger(__name__)

# player id -> slot number -> confirmed selections at that slot
ParticipationCounters = Dict[str, Dict[int, int]]


def slot_count(counters: ParticipationCounters, player_id: str, slot: int) -> int:
    return counters.get(player_id, {}).get(slot, 0)


def total_count(counters: ParticipationCounters, player_id: str) -> int:
    return sum(counters.get(player_id, {}).values())


def _validate(active: Sequence[Player], requested: int) -> None:
    if requested < 0:
        raise InvalidSlotCount(requested)
    if not active:
        raise InsufficientPlayers(1, 0)


def select_slots(
    active: Sequence[Player],
    requested: int,
    counters: ParticipationCounters,
    rng: np.random.Generator,
) -> List[SlotPick]:
    """
    Fill slots 1..requested in order. Each slot goes to a uniform pick from
    the not-yet-chosen players with the fewest confirmations at that slot.
    Stops early (without error) once every active player has a slot.
    """
    _validate(active, requested)

    remaining = list(active)
    selection: List[SlotPick] = []
    for slot in range(1, requested + 1):
        if not remaining:
            break
        tier = lowest_tier(remaining, lambda p: slot_count(counters, p.id, slot))
        chosen = pick_one(tier, rng)
        selection.append(SlotPick(slot=slot, player=chosen))
        remaining = [p for p in remaining if p.id != chosen.id]

    logger.debug("select_slots requested=%d filled=%d", requested, len(selection))
    return selection


def draw_tiered(
    active: Sequence[Player],
    requested: int,
    counters: ParticipationCounters,
    rng: np.random.Generator,
) -> List[SlotPick]:
    """
    Group draw by total confirmations: whole tiers are taken from the fewest
    upward, and the tier that overflows the request is randomly sampled.
    Picks are numbered in draw order.
    """
    _validate(active, requested)

    groups = group_by_key(active, lambda p: total_count(counters, p.id))
    chosen: List[Player] = []
    for tier_value in sorted(groups):
        need = requested - len(chosen)
        if need <= 0:
            break
        tier = groups[tier_value]
        if len(tier) <= need:
            chosen.extend(tier)
        else:
            chosen.extend(shuffle(tier, rng)[:need])

    logger.debug("draw_tiered requested=%d filled=%d", requested, len(chosen))
    return [SlotPick(slot=i, player=p) for i, p in enumerate(chosen, start=1)]


def confirm_slots(selection: Sequence[SlotPick], counters: ParticipationCounters) -> List[str]:
    """Commit a draw: +1 at (player, slot) for each pick. Returns touched ids."""
    touched: List[str] = []
    for pick in selection:
        per_slot = counters.setdefault(pick.player.id, {})
        per_slot[pick.slot] = per_slot.get(pick.slot, 0) + 1
        touched.append(pick.player.id)
    logger.info("confirmed %d slot pick(s)", len(touched))
    return touched


def reset_slot_counters(counters: ParticipationCounters) -> None:
    counters.clear()
    logger.info("slot counters reset")
