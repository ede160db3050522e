"""Data models for the BloodSheet settlement engine."""

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction

from .constants import DEFAULT_AUTO_PRESS_DEFICIT, DEFAULT_CONTEST_POT, DEFAULT_TRASH_VALUE

# Money is whole units everywhere except an exact pot-mode tie split.
Money = int | Fraction


class Dot(str, Enum):
    """Special achievement tagged on a hole score."""

    GREENIE = 'greenie'
    SANDIE = 'sandie'
    SNAKE = 'snake'
    PIN = 'pin'


@dataclass(frozen=True)
class Hole:
    """One hole of the course."""

    number: int
    par: int
    stroke_index: int


@dataclass(frozen=True)
class MatchPlayer:
    """A player as entered into a match, handicap frozen at match start."""

    id: str
    display_name: str
    handicap_index: float | None
    team: str
    is_guest: bool = False


@dataclass(frozen=True)
class HoleScore:
    """Recorded gross score (and dots) for one player on one hole."""

    player_id: str
    hole_number: int
    gross: int
    tags: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, 'tags', frozenset(self.tags))

    def has(self, dot: Dot) -> bool:
        return dot in self.tags


@dataclass(frozen=True)
class Press:
    """A Nassau-style sub-bet running from start_hole to the end of the round."""

    start_hole: int
    pressed_by_team: str
    automatic: bool = False


@dataclass(frozen=True)
class SideBets:
    """Side-bet switches and their parameters."""

    greenies: bool = False
    sandies: bool = False
    snake: bool = False
    birdies_double: bool = False
    bonus_skins: bool = False
    auto_press: bool = False
    auto_press_deficit: int = DEFAULT_AUTO_PRESS_DEFICIT
    par3_contest: bool = False
    par3_pot: int = DEFAULT_CONTEST_POT
    par5_contest: bool = False
    par5_pot: int = DEFAULT_CONTEST_POT
    team_skins: bool = False
    pot_mode: bool = False


@dataclass(frozen=True)
class WagerConfig:
    """Wager format and amounts for a match."""

    format: str
    wager_amount: int
    team_mode: str | None = None
    side_bets: SideBets = field(default_factory=SideBets)
    trash_value: int = DEFAULT_TRASH_VALUE


@dataclass(frozen=True)
class MatchSnapshot:
    """A single consistent view of a match at settlement time."""

    match_id: str
    holes: tuple
    players: tuple
    scores: tuple
    wager: WagerConfig
    presses: tuple = ()

    def __post_init__(self):
        for name in ('holes', 'players', 'scores', 'presses'):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @property
    def player_ids(self) -> list[str]:
        return [p.id for p in self.players]

    def hole(self, number: int) -> Hole | None:
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def player(self, player_id: str) -> MatchPlayer | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def team_members(self, team: str) -> list[MatchPlayer]:
        return [p for p in self.players if p.team == team]


@dataclass(frozen=True)
class SettlementLine:
    """One row of a player's itemized ledger (+ receives, - pays)."""

    label: str
    sublabel: str
    amount: Money
    is_press: bool = False
    pending: bool = False


@dataclass
class Settlement:
    """Itemized ledger for every player in a match."""

    match_id: str
    format: str
    per_player_lines: dict[str, list[SettlementLine]] = field(default_factory=dict)
    per_player_total: dict[str, Money] = field(default_factory=dict)
    rejected_scores: list = field(default_factory=list)

    def lines_for(self, player_id: str) -> list[SettlementLine]:
        return self.per_player_lines.get(player_id, [])

    def total_for(self, player_id: str) -> Money:
        return self.per_player_total.get(player_id, 0)


def as_money(value) -> Money:
    """Collapse a whole-valued Fraction back to int."""
    if isinstance(value, Fraction) and value.denominator == 1:
        return value.numerator
    return value
