from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from .constants import COACH_NAME

Role = Literal["Guard", "Forward", "Flex"]


class Player(BaseModel):
    id: str
    name: str
    role: Role = "Flex"
    active: bool = True


# -----------------------
# Counters (owned by the stats store, keyed by player id)
# -----------------------
class PairStats(BaseModel):
    offense_count: int = Field(default=0, ge=0)
    defense_count: int = Field(default=0, ge=0)
    makes: int = Field(default=0, ge=0)
    stops: int = Field(default=0, ge=0)
    last_opponent_id: Optional[str] = None

    @property
    def total_turns(self) -> int:
        return self.offense_count + self.defense_count


class AttemptStats(BaseModel):
    attempts: int = Field(default=0, ge=0)
    successes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _successes_within_attempts(self):
        if self.successes > self.attempts:
            raise ValueError("successes cannot exceed attempts")
        return self

    @property
    def pct(self) -> float:
        return self.successes / self.attempts if self.attempts else 0.0


# -----------------------
# Selections
# -----------------------
class SlotPick(BaseModel):
    slot: int = Field(ge=1)
    player: Player


class Pairing(BaseModel):
    offense: Player
    defense: Player
    widened: bool = False  # True when the turn tier alone had no valid opponent


class TeamMember(BaseModel):
    name: str
    role: Role                      # effective role on this team (never Flex)
    player_id: Optional[str] = None
    is_placeholder: bool = False

    @classmethod
    def coach(cls, role: str) -> "TeamMember":
        return cls(name=COACH_NAME, role=role, is_placeholder=True)

    @classmethod
    def from_player(cls, player: Player, role: str) -> "TeamMember":
        return cls(name=player.name, role=role, player_id=player.id)


class Team(BaseModel):
    label: str
    slots: Dict[str, List[TeamMember]] = Field(default_factory=dict)  # role -> members

    def members(self) -> List[TeamMember]:
        return [m for role_members in self.slots.values() for m in role_members]

    def player_ids(self) -> List[str]:
        return [m.player_id for m in self.members() if not m.is_placeholder]

    def placeholder_count(self) -> int:
        return sum(1 for m in self.members() if m.is_placeholder)


class TeamAssignment(BaseModel):
    team_a: Team
    team_b: Team
    sitting_out: List[Player] = Field(default_factory=list)

    def assigned_ids(self) -> List[str]:
        return self.team_a.player_ids() + self.team_b.player_ids()

    def placeholder_count(self) -> int:
        return self.team_a.placeholder_count() + self.team_b.placeholder_count()


# -----------------------
# Results returned to the UI layer
# -----------------------
class _Result(BaseModel):
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SlotDrawResult(_Result):
    selection: List[SlotPick] = Field(default_factory=list)


class TeamResult(_Result):
    assignment: Optional[TeamAssignment] = None


class PairResult(_Result):
    pairing: Optional[Pairing] = None


class StatsResult(_Result):
    """Outcome of a counter mutation (confirm, record, reset)."""
    updated_ids: List[str] = Field(default_factory=list)
