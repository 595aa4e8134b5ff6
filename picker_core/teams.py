from __future__ import annotations
import logging
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from .constants import FLEX, TEAM_LABELS
from .errors import InsufficientPlayers
from .fairness import coin_flip, pick_one, shuffle
from .models import Player, Team, TeamAssignment, TeamMember

logger = logging.getLogger(__name__)


def _partition(active: Sequence[Player], roles: List[str]) -> Tuple[Dict[str, List[Player]], List[Player]]:
    fixed: Dict[str, List[Player]] = {r: [] for r in roles}
    flex: List[Player] = []
    for p in active:
        if p.role in fixed:
            fixed[p.role].append(p)
        elif p.role == FLEX:
            flex.append(p)
        # a fixed role with no quota this scrimmage has no slots; the player sits out
    return fixed, flex


def assign_flex_roles(
    fixed: Dict[str, List[Player]],
    flex: Sequence[Player],
    role_quotas: Mapping[str, int],
    rng: np.random.Generator,
) -> Dict[str, List[Player]]:
    """
    Route flexible players into fixed roles. While any role is short of its
    two-team total, a flex player covers the largest shortfall (ties drawn
    uniformly); after that each goes to a uniformly random role.
    Returns the augmented role lists (input lists are not mutated).
    """
    groups = {r: list(members) for r, members in fixed.items()}
    roles = list(role_quotas)
    if not roles:
        return groups

    deficit = {r: max(0, 2 * role_quotas[r] - len(groups[r])) for r in roles}
    for p in shuffle(flex, rng):
        open_roles = [r for r in roles if deficit[r] > 0]
        if open_roles:
            worst = max(deficit[r] for r in open_roles)
            role = pick_one([r for r in open_roles if deficit[r] == worst], rng)
            deficit[role] -= 1
        else:
            role = pick_one(roles, rng)
        groups[role].append(p)
    return groups


def distribute_role(
    players: Sequence[Player],
    per_team: int,
    rng: np.random.Generator,
) -> Tuple[List[Player], List[Player], List[Player]]:
    """Split one role's players between two teams. Returns (team_a, team_b, overflow)."""
    team_a: List[Player] = []
    team_b: List[Player] = []
    overflow: List[Player] = []
    for p in shuffle(players, rng):
        a_open = len(team_a) < per_team
        b_open = len(team_b) < per_team
        if a_open and b_open:
            (team_a if coin_flip(rng) else team_b).append(p)
        elif a_open:
            team_a.append(p)
        elif b_open:
            team_b.append(p)
        else:
            overflow.append(p)
    return team_a, team_b, overflow


def balance(
    active: Sequence[Player],
    role_quotas: Mapping[str, int],
    rng: np.random.Generator,
) -> TeamAssignment:
    """
    Split the active roster into two teams with role_quotas[role] starters
    per role each. Empty slots become coach placeholders; players who do not
    fit sit out.
    """
    if not active:
        raise InsufficientPlayers(1, 0)

    roles = list(role_quotas)
    fixed, flex = _partition(active, roles)
    groups = assign_flex_roles(fixed, flex, role_quotas, rng)

    teams = [Team(label=label) for label in TEAM_LABELS]
    for role in roles:
        per_team = role_quotas[role]
        a_players, b_players, overflow = distribute_role(groups[role], per_team, rng)
        for team, members in zip(teams, (a_players, b_players)):
            slots = [TeamMember.from_player(p, role) for p in members]
            slots += [TeamMember.coach(role) for _ in range(per_team - len(members))]
            team.slots[role] = slots
        if overflow:
            logger.debug("%d %s(s) overflow both teams", len(overflow), role)

    assigned = set(teams[0].player_ids()) | set(teams[1].player_ids())
    sitting_out = [p for p in active if p.id not in assigned]

    result = TeamAssignment(team_a=teams[0], team_b=teams[1], sitting_out=sitting_out)
    logger.debug(
        "balance: %d placeholder(s), %d sitting out",
        result.placeholder_count(), len(sitting_out),
    )
    return result
