"""Nassau match-play resolver (1v1 and 2v2) with presses."""

import logging
from dataclasses import dataclass

from .constants import (
    BACK_NINE,
    FRONT_NINE,
    HOLES_PER_NINE,
    HOLES_PER_ROUND,
    LABEL_BACK_NINE,
    LABEL_FRONT_NINE,
    LABEL_OVERALL,
    LABEL_PRESS,
    ROUND_HOLES,
    TEAM_A,
    TEAM_B,
    TEAM_MODE_FOURBALL,
)
from .ledger import ScoreLedger
from .models import Dot, MatchSnapshot, Press, SettlementLine
from .net import NetScoreCard

logger = logging.getLogger('bloodsheet.nassau')


@dataclass(frozen=True)
class HolePoints:
    """Points each team earned on one hole."""

    team_a: int = 0
    team_b: int = 0

    def for_team(self, team: str) -> tuple[int, int]:
        """Return (mine, theirs) from one team's point of view."""
        if team == TEAM_A:
            return self.team_a, self.team_b
        return self.team_b, self.team_a


@dataclass(frozen=True)
class LegResult:
    """Outcome of one Nassau leg or press."""

    label: str
    holes: tuple
    points_a: int
    points_b: int
    settled: bool = True
    press: Press | None = None

    def amount_for(self, team: str, wager_amount: int) -> int:
        """Signed amount for one player on the given team."""
        if not self.settled:
            return 0
        mine, theirs = (
            (self.points_a, self.points_b) if team == TEAM_A else (self.points_b, self.points_a)
        )
        if mine > theirs:
            return wager_amount
        if theirs > mine:
            return -wager_amount
        return 0


@dataclass(frozen=True)
class MatchStatus:
    """Running match-play status from team A's point of view."""

    holes_up: int
    holes_played: int

    @property
    def label(self) -> str:
        if self.holes_up == 0:
            return 'AS'
        return f'{abs(self.holes_up)} {"UP" if self.holes_up > 0 else "DN"}'

    @property
    def leader(self) -> str | None:
        if self.holes_up > 0:
            return TEAM_A
        if self.holes_up < 0:
            return TEAM_B
        return None


def _outcome(amount: int) -> str:
    if amount > 0:
        return 'Won'
    if amount < 0:
        return 'Lost'
    return 'Pushed'


class NassauResolver:
    """
    Resolve Front 9, Back 9, Overall and press bets for a two-team match.

    Only holes complete for every player earn points. Fixed legs are listed
    once their whole range is complete; presses run from their start hole to
    the last completed hole.
    """

    def __init__(self, snapshot: MatchSnapshot, ledger: ScoreLedger, nets: NetScoreCard):
        self.snapshot = snapshot
        self.ledger = ledger
        self.nets = nets
        self.wager = snapshot.wager
        self.side_bets = snapshot.wager.side_bets
        self.team_ids = {
            TEAM_A: [p.id for p in snapshot.team_members(TEAM_A)],
            TEAM_B: [p.id for p in snapshot.team_members(TEAM_B)],
        }
        self.complete_holes = ledger.holes_complete(snapshot.player_ids)
        self.points = {h: self.hole_points(h) for h in self.complete_holes}

    def hole_points(self, hole_number: int) -> HolePoints:
        """
        Points for a single complete hole.

        1v1: low net wins 1 (2 with birdies double when the winner's gross
        is under par). 2v2: one point for low ball, one for aggregate, and
        with birdies double one more per gross birdie. A greenie on a par 3
        adds one point per side that logged it.
        """
        hole = self.snapshot.hole(hole_number)
        nets_a = self.nets.nets_on_hole(self.team_ids[TEAM_A], hole_number)
        nets_b = self.nets.nets_on_hole(self.team_ids[TEAM_B], hole_number)
        if not nets_a or not nets_b:
            return HolePoints()

        points_a = 0
        points_b = 0

        if self.wager.team_mode == TEAM_MODE_FOURBALL:
            low_a = min(n.adjusted_net for n in nets_a)
            low_b = min(n.adjusted_net for n in nets_b)
            if low_a < low_b:
                points_a += 1
            elif low_b < low_a:
                points_b += 1

            sum_a = sum(n.adjusted_net for n in nets_a)
            sum_b = sum(n.adjusted_net for n in nets_b)
            if sum_a < sum_b:
                points_a += 1
            elif sum_b < sum_a:
                points_b += 1

            if self.side_bets.birdies_double:
                points_a += sum(1 for n in nets_a if n.is_birdie_or_better)
                points_b += sum(1 for n in nets_b if n.is_birdie_or_better)
        else:
            net_a, net_b = nets_a[0], nets_b[0]
            if net_a.adjusted_net < net_b.adjusted_net:
                points_a += 2 if self.side_bets.birdies_double and net_a.is_birdie_or_better else 1
            elif net_b.adjusted_net < net_a.adjusted_net:
                points_b += 2 if self.side_bets.birdies_double and net_b.is_birdie_or_better else 1

        if self.side_bets.greenies and hole.par == 3:
            if self._logged(Dot.GREENIE, TEAM_A, hole_number):
                points_a += 1
            if self._logged(Dot.GREENIE, TEAM_B, hole_number):
                points_b += 1

        return HolePoints(team_a=points_a, team_b=points_b)

    def _logged(self, dot: Dot, team: str, hole_number: int) -> bool:
        for player_id in self.team_ids[team]:
            score = self.ledger.hole_scores_for(player_id, hole_number)
            if score is not None and score.has(dot):
                return True
        return False

    def leg_points(self, holes) -> tuple[int, int]:
        """Total (team A, team B) points over the completed holes in a range."""
        points_a = 0
        points_b = 0
        for hole_number in holes:
            result = self.points.get(hole_number)
            if result is None:
                continue
            points_a += result.team_a
            points_b += result.team_b
        return points_a, points_b

    def fixed_legs(self) -> list[LegResult]:
        """Front 9, Back 9 and Overall legs whose whole range is complete."""
        legs = []
        for label, holes in (
            (LABEL_FRONT_NINE, FRONT_NINE),
            (LABEL_BACK_NINE, BACK_NINE),
            (LABEL_OVERALL, ROUND_HOLES),
        ):
            if not all(h in self.points for h in holes):
                logger.debug(f'{label} not complete, omitted')
                continue
            points_a, points_b = self.leg_points(holes)
            legs.append(LegResult(label=label, holes=holes, points_a=points_a, points_b=points_b))
        return legs

    def auto_presses(self) -> list[Press]:
        """
        Presses opened automatically when a side falls behind.

        Walks completed holes in order. Whenever the trailing team is
        auto_press_deficit points down on the most recent bet in the current
        nine, a press for that team starts on the next hole.
        """
        if not self.side_bets.auto_press:
            return []

        deficit = self.side_bets.auto_press_deficit
        manual_starts = {p.start_hole for p in self.snapshot.presses}
        created: list[Press] = []

        for hole_number in ROUND_HOLES:
            if hole_number not in self.points:
                break
            if hole_number == HOLES_PER_ROUND:
                break

            nine_start = 1 if hole_number <= HOLES_PER_NINE else HOLES_PER_NINE + 1
            open_starts = [nine_start] + [
                p.start_hole
                for p in (*self.snapshot.presses, *created)
                if nine_start <= p.start_hole <= hole_number
            ]
            latest = max(open_starts)
            points_a, points_b = self.leg_points(range(latest, hole_number + 1))
            if abs(points_a - points_b) < deficit:
                continue

            start = hole_number + 1
            if start in manual_starts or any(p.start_hole == start for p in created):
                continue
            down = TEAM_A if points_a < points_b else TEAM_B
            created.append(Press(start_hole=start, pressed_by_team=down, automatic=True))
            logger.debug(f'Auto-press for team {down} from hole {start}')

        return created

    def presses(self) -> list[Press]:
        """Manual and automatic presses in start-hole order."""
        every = [*self.snapshot.presses, *self.auto_presses()]
        return sorted(every, key=lambda p: (p.start_hole, p.pressed_by_team, p.automatic))

    def press_legs(self) -> list[LegResult]:
        """
        Legs for presses with at least one completed hole.

        A press settles on the holes played so far when every hole from its
        start through the last completed hole is complete; otherwise it is
        listed as pending.
        """
        played_through = self.ledger.played_through(self.snapshot.player_ids)
        legs = []
        for press in self.presses():
            holes = tuple(range(press.start_hole, played_through + 1))
            if not any(h in self.points for h in holes):
                continue
            settled = all(h in self.points for h in holes)
            points_a, points_b = self.leg_points(holes)
            legs.append(
                LegResult(
                    label=LABEL_PRESS,
                    holes=holes,
                    points_a=points_a,
                    points_b=points_b,
                    settled=settled,
                    press=press,
                )
            )
        return legs

    def status(self) -> MatchStatus:
        """Holes up for team A over every completed hole."""
        points_a, points_b = self.leg_points(self.complete_holes)
        return MatchStatus(holes_up=points_a - points_b, holes_played=len(self.complete_holes))

    def resolve(self) -> dict[str, list[SettlementLine]]:
        """Ledger lines for every player from the Nassau legs and presses."""
        lines: dict[str, list[SettlementLine]] = {pid: [] for pid in self.snapshot.player_ids}
        legs = self.fixed_legs() + self.press_legs()

        for team in (TEAM_A, TEAM_B):
            for leg in legs:
                amount = leg.amount_for(team, self.wager.wager_amount)
                if leg.press is None:
                    line = SettlementLine(label=leg.label, sublabel=_outcome(amount), amount=amount)
                else:
                    sublabel = f'Hole {leg.press.start_hole} • Team {leg.press.pressed_by_team}'
                    if leg.press.automatic:
                        sublabel += ' • Auto'
                    if not leg.settled:
                        sublabel += ' • Pending'
                    line = SettlementLine(
                        label=leg.label,
                        sublabel=sublabel,
                        amount=amount,
                        is_press=True,
                        pending=not leg.settled,
                    )
                for player_id in self.team_ids[team]:
                    lines[player_id].append(line)

        logger.debug(
            f'Nassau {self.snapshot.match_id}: {len(self.complete_holes)} holes complete, '
            f'{len(legs)} legs'
        )
        return lines
