"""Handicap stroke allocation by stroke index."""

import math
from dataclasses import dataclass

from .constants import HOLES_PER_ROUND, TEAM_A, TEAM_B
from .errors import IncompleteHandicapData
from .models import Hole, MatchPlayer


@dataclass(frozen=True)
class TeamStrokes:
    """Extra team strokes for the weaker side in 2v2 play."""

    team: str | None
    difference: int
    holes: frozenset

    def applies(self, team: str, hole_number: int) -> bool:
        return team == self.team and hole_number in self.holes


def playing_handicap(handicap_index: float) -> int:
    """Round a handicap index to whole strokes, halves rounding up."""
    return math.floor(handicap_index + 0.5)


def allowance(hcp: int, stroke_index: int) -> int:
    """
    Strokes received on a hole of the given stroke index.

    floor(hcp / 18) on every hole, plus one on each hole whose stroke index
    is within hcp mod 18. Floor semantics make a plus handicap give strokes
    back on the easiest holes.

    Examples:
        allowance(18, 7) -> 1
        allowance(20, 2) -> 2
        allowance(-2, 17) -> -1
    """
    base, extra = divmod(hcp, HOLES_PER_ROUND)
    return base + (1 if stroke_index <= extra else 0)


def allocation_table(hcp: int, holes) -> dict[int, int]:
    """Map hole number -> strokes received for a whole course."""
    return {hole.number: allowance(hcp, hole.stroke_index) for hole in holes}


def require_handicaps(players) -> None:
    """Raise IncompleteHandicapData if any player has no handicap index."""
    missing = [p.id for p in players if p.handicap_index is None]
    if missing:
        raise IncompleteHandicapData(missing)


def team_handicap(players, team: str) -> int:
    """Sum of rounded handicaps for one team."""
    return sum(playing_handicap(p.handicap_index) for p in players if p.team == team)


def team_strokes(players, holes) -> TeamStrokes:
    """
    Work out the 2v2 team stroke spot.

    The team with the higher combined handicap receives one stroke on each
    hole whose stroke index is at most the difference between the two
    combined handicaps.
    """
    require_handicaps(players)
    team_a = team_handicap(players, TEAM_A)
    team_b = team_handicap(players, TEAM_B)
    difference = abs(team_a - team_b)

    if difference == 0:
        return TeamStrokes(team=None, difference=0, holes=frozenset())

    weaker = TEAM_A if team_a > team_b else TEAM_B
    stroke_holes = frozenset(h.number for h in holes if h.stroke_index <= difference)
    return TeamStrokes(team=weaker, difference=difference, holes=stroke_holes)


def handicap_spread(players) -> int:
    """Difference between the highest and lowest playing handicap."""
    require_handicaps(players)
    handicaps = [playing_handicap(p.handicap_index) for p in players]
    if not handicaps:
        return 0
    return max(handicaps) - min(handicaps)


def is_stroke_hole(players, hole: Hole) -> bool:
    """True when the match's handicap spread allots a stroke on this hole (display only)."""
    return allowance(handicap_spread(players), hole.stroke_index) > 0


def relative_strokes(players, player: MatchPlayer, hole: Hole) -> int:
    """Strokes a player gets on a hole when playing off the lowest handicap in the match."""
    require_handicaps(players)
    lowest = min(playing_handicap(p.handicap_index) for p in players)
    spot = max(0, playing_handicap(player.handicap_index) - lowest)
    return allowance(spot, hole.stroke_index)
