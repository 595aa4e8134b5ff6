# FILE: picker_core/errors.py
"""
Error kinds raised by the selectors. The session layer turns these into
explicit failure values on its result models; nothing here is swallowed.
"""


class PickerError(ValueError):
    """Base class for rejected picker operations."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class InsufficientPlayers(PickerError):
    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Need at least {required} active player(s), have {available}.")


class InvalidSlotCount(PickerError):
    def __init__(self, requested: int):
        self.requested = requested
        super().__init__(f"Slot count must be >= 0, got {requested}.")


class NothingToConfirm(PickerError):
    pass


class UnknownPlayer(PickerError, KeyError):
    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Unknown player id: {player_id}")

    def __str__(self) -> str:
        return self.args[0]


class OutcomeWithoutAttempt(PickerError):
    pass


class InvalidQuota(PickerError):
    pass
