"""Exceptions raised by the settlement engine."""


class SettlementError(Exception):
    """Base class for every error the engine raises."""


class MalformedScore(SettlementError):
    """A single hole-score row that cannot be used.

    The engine reports these per row; the affected player's hole is treated
    as not yet recorded.
    """

    def __init__(self, message: str, player_id: str | None = None, hole_number: int | None = None):
        super().__init__(message)
        self.player_id = player_id
        self.hole_number = hole_number


class IncompleteHandicapData(SettlementError):
    """A player needed for stroke allocation has no handicap index."""

    def __init__(self, player_ids: list[str]):
        self.player_ids = list(player_ids)
        super().__init__(f'Missing handicap index for: {", ".join(self.player_ids)}')


class InvalidWagerConfig(SettlementError):
    """The wager setup (format, amounts, teams, presses) is not settleable."""


class InvalidCourse(SettlementError):
    """The hole list is not a valid 18-hole course."""
