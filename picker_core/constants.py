from __future__ import annotations
from typing import Dict, List

# -----------------------------
# Roles
# -----------------------------
GUARD = "Guard"
FORWARD = "Forward"
FLEX = "Flex"

ROLES: List[str] = [GUARD, FORWARD, FLEX]
FIXED_ROLES: List[str] = [GUARD, FORWARD]

# Starters per team, per fixed role (5-on-5 scrimmage)
DEFAULT_ROLE_QUOTAS: Dict[str, int] = {GUARD: 3, FORWARD: 2}

COACH_NAME = "Coach"
TEAM_LABELS: List[str] = ["A", "B"]

# --------------------------------
# Record store keys (one flat record set)
# --------------------------------
PLAYERS_KEY = "chaos-picker-players"
SLOT_COUNTERS_KEY = "chaos-picker-slot-counters"
PAIR_STATS_KEY = "chaos-picker-pair-stats"
ATTEMPT_STATS_KEY = "chaos-picker-attempt-stats"

# ---------------------
# CSV roster
# ---------------------
CSV_HEADERS = ["id", "Name", "Role", "Active"]
HEADER_ALIASES = {
    # canonical -> set of aliases
    "id": {"id", "player_id", "player id"},
    "Name": {"name", "player", "full name"},
    "Role": {"role", "position", "pos"},
    "Active": {"active", "isactive", "is_active", "present", "ispresent"},
}

ROLE_ALIASES = {
    "g": GUARD, "guard": GUARD, "pg": GUARD, "sg": GUARD,
    "f": FORWARD, "forward": FORWARD, "sf": FORWARD, "pf": FORWARD, "c": FORWARD, "center": FORWARD,
    "flex": FLEX, "x": FLEX, "wing": FLEX, "any": FLEX,
}


# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    return " ".join(s.split())


def normalize_role(r: str) -> str:
    """Map free-text roles ("G", "guard", "PF") onto Guard/Forward/Flex."""
    if not r:
        return FLEX
    key = str(r).strip().lower()
    if key not in ROLE_ALIASES:
        raise ValueError(f"Unknown role: {r!r}")
    return ROLE_ALIASES[key]
