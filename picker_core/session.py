# FILE: picker_core/session.py
"""
Session context handed to a UI. Owns the rng, the record store views and
the pending (drawn but unconfirmed) selections. Selector failures come back
as `error` / `error_kind` on the result models; counters are only written
after a successful, confirmed mutation.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

import numpy as np
from pydantic import ValidationError

from .config import AppConfig, configure_logging, load_app_config
from .errors import InvalidQuota, NothingToConfirm, PickerError
from .fairness import make_rng
from .models import (
    AttemptStats, Pairing, PairResult, Player, SlotDrawResult, SlotPick, StatsResult, TeamResult,
)
from .pairing import record_make, record_miss, reset_pair_stats, select_pair
from .rotation import RotationQueue, reset_attempt_stats
from .slots import confirm_slots, draw_tiered, reset_slot_counters, select_slots
from .store import JsonFileRecordStore, MemoryRecordStore, RecordStore, RosterStore, StatsStore
from .teams import balance

logger = logging.getLogger(__name__)


def _failure(result_cls, err: PickerError):
    logger.warning("%s: %s", err.kind, err)
    return result_cls(error=str(err), error_kind=err.kind)


class PickerSession:
    def __init__(
        self,
        records: Optional[RecordStore] = None,
        config: Optional[AppConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or AppConfig()
        self.records = records or MemoryRecordStore()
        self.roster = RosterStore(self.records)
        self.stats = StatsStore(self.records)
        self.rng = rng if rng is not None else make_rng(self.config.random_seed)

        self.pending_slots: List[SlotPick] = []
        self.pending_pair: Optional[Pairing] = None
        self._rotation = RotationQueue.from_players(self.roster.load_active_players())

    @classmethod
    def from_config_file(cls, path: Optional[str] = None) -> "PickerSession":
        """File-backed session: YAML config, logging, JSON record store."""
        config = load_app_config(path)
        configure_logging(config.log_level)
        return cls(records=JsonFileRecordStore(config.store_path), config=config)

    # -----------------------
    # Slotted picker
    # -----------------------
    def draw_slots(self, requested: int) -> SlotDrawResult:
        self.pending_slots = []
        try:
            selection = select_slots(
                self.roster.load_active_players(), requested, self.stats.load_slot_counters(), self.rng
            )
        except PickerError as err:
            return _failure(SlotDrawResult, err)
        self.pending_slots = selection
        return SlotDrawResult(selection=selection)

    def draw_group(self, requested: int) -> SlotDrawResult:
        """
        Tiered group draw. Confirming it counts pick i as slot i, so group
        draws feed the same per-slot counters the slotted picker balances on.
        """
        self.pending_slots = []
        try:
            selection = draw_tiered(
                self.roster.load_active_players(), requested, self.stats.load_slot_counters(), self.rng
            )
        except PickerError as err:
            return _failure(SlotDrawResult, err)
        self.pending_slots = selection
        return SlotDrawResult(selection=selection)

    def confirm_slots(self) -> StatsResult:
        """Commit the latest draw once; a second call needs a fresh draw."""
        if not self.pending_slots:
            return _failure(StatsResult, NothingToConfirm("No unconfirmed draw."))
        counters = self.stats.load_slot_counters()
        touched = confirm_slots(self.pending_slots, counters)
        self.stats.save_slot_counters(counters)
        self.pending_slots = []
        return StatsResult(updated_ids=touched)

    def slot_counters(self) -> Dict[str, Dict[int, int]]:
        return self.stats.load_slot_counters()

    def reset_slot_counters(self) -> StatsResult:
        counters = self.stats.load_slot_counters()
        ids = list(counters)
        reset_slot_counters(counters)
        self.stats.save_slot_counters(counters)
        self.pending_slots = []
        return StatsResult(updated_ids=ids)

    # -----------------------
    # Team balancer
    # -----------------------
    def _quotas(self, role_quotas: Optional[Dict[str, int]]) -> Dict[str, int]:
        if role_quotas is None:
            return self.config.role_quotas
        try:
            return AppConfig(role_quotas=role_quotas).role_quotas
        except ValidationError as err:
            msg = "; ".join(e["msg"] for e in err.errors())
            raise InvalidQuota(msg) from err

    def balance_teams(self, role_quotas: Optional[Dict[str, int]] = None) -> TeamResult:
        try:
            quotas = self._quotas(role_quotas)
            assignment = balance(self.roster.load_active_players(), quotas, self.rng)
        except PickerError as err:
            return _failure(TeamResult, err)
        return TeamResult(assignment=assignment)

    # -----------------------
    # Pairing selector
    # -----------------------
    def draw_pair(self) -> PairResult:
        self.pending_pair = None
        try:
            pairing = select_pair(self.roster.load_active_players(), self.stats.load_pair_stats(), self.rng)
        except PickerError as err:
            return _failure(PairResult, err)
        self.pending_pair = pairing
        return PairResult(pairing=pairing)

    def _resolve_pair(self, recorder) -> StatsResult:
        if self.pending_pair is None:
            return _failure(StatsResult, NothingToConfirm("No pairing to resolve."))
        off, dfn = self.pending_pair.offense.id, self.pending_pair.defense.id
        stats = self.stats.load_pair_stats()
        recorder(off, dfn, stats)
        self.stats.save_pair_stats(stats)
        self.pending_pair = None
        return StatsResult(updated_ids=[off, dfn])

    def record_make(self) -> StatsResult:
        return self._resolve_pair(record_make)

    def record_miss(self) -> StatsResult:
        return self._resolve_pair(record_miss)

    def reset_pair_stats(self) -> StatsResult:
        stats = self.stats.load_pair_stats()
        ids = list(stats)
        reset_pair_stats(stats)
        self.stats.save_pair_stats(stats)
        self.pending_pair = None
        return StatsResult(updated_ids=ids)

    # -----------------------
    # Rotation queue
    # -----------------------
    def rotation_order(self) -> List[str]:
        self._rotation.sync(self.roster.load_active_players())
        return self._rotation.peek_order()

    def current_turn(self) -> Optional[str]:
        self._rotation.sync(self.roster.load_active_players())
        return self._rotation.current()

    def record_attempt(self, player_id: str) -> StatsResult:
        self._rotation.sync(self.roster.load_active_players())
        stats = self.stats.load_attempt_stats()
        try:
            self._rotation.record_attempt(player_id, stats)
        except PickerError as err:
            return _failure(StatsResult, err)
        self.stats.save_attempt_stats(stats)
        return StatsResult(updated_ids=[player_id])

    def record_outcome(self, player_id: str, success: bool) -> StatsResult:
        self._rotation.sync(self.roster.load_active_players())
        stats = self.stats.load_attempt_stats()
        try:
            self._rotation.record_outcome(player_id, success, stats)
        except PickerError as err:
            return _failure(StatsResult, err)
        self.stats.save_attempt_stats(stats)
        return StatsResult(updated_ids=[player_id])

    def attempt_stats(self) -> Dict[str, AttemptStats]:
        return self.stats.load_attempt_stats()

    def reset_attempt_stats(self) -> StatsResult:
        stats = self.stats.load_attempt_stats()
        ids = list(stats)
        reset_attempt_stats(stats)
        self.stats.save_attempt_stats(stats)
        self._rotation.clear_open()
        return StatsResult(updated_ids=ids)

    # -----------------------
    # Roster passthroughs
    # -----------------------
    def active_players(self) -> List[Player]:
        return self.roster.load_active_players()

    def reset_all(self) -> None:
        self.stats.reset_all()
        self._rotation.clear_open()
        self.pending_slots = []
        self.pending_pair = None
