"""Skins resolver with carry-over pots, team skins, pot mode and bonus skins."""

import logging
from dataclasses import dataclass
from fractions import Fraction
from functools import reduce

from .constants import (
    BIRDIE_BONUS_UNITS,
    EAGLE_BONUS_UNITS,
    LABEL_BONUS_SKIN,
    LABEL_CARRYOVER,
    LABEL_SKIN,
    LABEL_SKINS_POT,
    PIN_BONUS_UNITS,
    TEAM_A,
    TEAM_B,
)
from .ledger import ScoreLedger
from .models import Dot, Hole, HoleScore, MatchSnapshot, SettlementLine, as_money
from .net import NetScoreCard

logger = logging.getLogger('bloodsheet.skins')


@dataclass(frozen=True)
class SkinAward:
    """A skin won on a hole, absorbing any carried holes before it."""

    hole_number: int
    first_hole: int
    winners: tuple
    holes_in_pot: int

    @property
    def span(self) -> str:
        if self.first_hole == self.hole_number:
            return f'Hole {self.hole_number}'
        return f'Holes {self.first_hole}–{self.hole_number}'


@dataclass(frozen=True)
class SkinsState:
    """Fold accumulator for the hole-by-hole skins walk."""

    carry: int = 0
    carry_start: int | None = None
    carry_last: int | None = None
    awards: tuple = ()


def bonus_units(score: HoleScore, par: int) -> list[tuple[str, int]]:
    """
    Bonus skin units earned on one score.

    Pin 1, birdie (exactly one under par) 1, eagle or better 2.
    """
    units = []
    if score.has(Dot.PIN):
        units.append(('Pin', PIN_BONUS_UNITS))
    if score.gross <= par - 2:
        units.append(('Eagle', EAGLE_BONUS_UNITS))
    elif score.gross == par - 1:
        units.append(('Birdie', BIRDIE_BONUS_UNITS))
    return units


class SkinsResolver:
    """
    Walk holes 1-18 in ascending order, paying out skins.

    Holes not complete for every player are skipped. A unique low net (or
    low team best ball with team skins) wins the hole and every carried hole
    before it; a tie carries the pot forward.
    """

    def __init__(self, snapshot: MatchSnapshot, ledger: ScoreLedger, nets: NetScoreCard):
        self.snapshot = snapshot
        self.ledger = ledger
        self.nets = nets
        self.wager = snapshot.wager
        self.side_bets = snapshot.wager.side_bets
        self.player_ids = snapshot.player_ids
        self.holes = sorted(snapshot.holes, key=lambda h: h.number)
        self.complete_holes = set(ledger.holes_complete(self.player_ids))
        self.state = reduce(self._step, self.holes, SkinsState())

    def _hole_winners(self, hole: Hole) -> tuple:
        if self.side_bets.team_skins:
            best = {}
            for team in (TEAM_A, TEAM_B):
                members = [p.id for p in self.snapshot.team_members(team)]
                best[team] = min(n.net for n in self.nets.nets_on_hole(members, hole.number))
            if best[TEAM_A] == best[TEAM_B]:
                return ()
            winning_team = TEAM_A if best[TEAM_A] < best[TEAM_B] else TEAM_B
            return tuple(p.id for p in self.snapshot.team_members(winning_team))

        nets = self.nets.nets_on_hole(self.player_ids, hole.number)
        low = min(n.net for n in nets)
        leaders = [n.player_id for n in nets if n.net == low]
        return tuple(leaders) if len(leaders) == 1 else ()

    def _step(self, state: SkinsState, hole: Hole) -> SkinsState:
        if hole.number not in self.complete_holes:
            return state

        first_hole = state.carry_start if state.carry_start is not None else hole.number
        winners = self._hole_winners(hole)
        if not winners:
            return SkinsState(
                carry=state.carry + 1,
                carry_start=first_hole,
                carry_last=hole.number,
                awards=state.awards,
            )

        award = SkinAward(
            hole_number=hole.number,
            first_hole=first_hole,
            winners=winners,
            holes_in_pot=1 + state.carry,
        )
        return SkinsState(awards=state.awards + (award,))

    @property
    def awards(self) -> tuple:
        return self.state.awards

    @property
    def round_complete(self) -> bool:
        return len(self.complete_holes) == len(self.holes)

    def _name(self, player_id: str) -> str:
        player = self.snapshot.player(player_id)
        return player.display_name if player else player_id

    def _winner_name(self, award: SkinAward) -> str:
        if self.side_bets.team_skins:
            return f'Team {self.snapshot.player(award.winners[0]).team}'
        return self._name(award.winners[0])

    def skin_counts(self) -> dict[str, int]:
        """Holes won per player (carried holes included)."""
        counts = {pid: 0 for pid in self.player_ids}
        for award in self.awards:
            for player_id in award.winners:
                counts[player_id] += award.holes_in_pot
        return counts

    def _skin_lines(self, lines: dict[str, list[SettlementLine]]) -> None:
        wager = self.wager.wager_amount
        for award in self.awards:
            pot = award.holes_in_pot * wager
            winners = set(award.winners)
            losers = [pid for pid in self.player_ids if pid not in winners]
            won = pot * len(losers)
            lost = -pot * len(award.winners)
            for player_id in self.player_ids:
                if player_id in winners:
                    line = SettlementLine(LABEL_SKIN, f'{award.span} • Won', won)
                else:
                    line = SettlementLine(
                        LABEL_SKIN, f'{award.span} • {self._winner_name(award)}', lost
                    )
                lines[player_id].append(line)

    def _pot_lines(self, lines: dict[str, list[SettlementLine]]) -> None:
        wager = self.wager.wager_amount
        counts = self.skin_counts()

        if not self.round_complete:
            for player_id in self.player_ids:
                lines[player_id].append(
                    SettlementLine(
                        LABEL_SKINS_POT, f'{counts[player_id]} skins • Pending', 0, pending=True
                    )
                )
            return

        most = max(counts.values())
        if most == 0:
            for player_id in self.player_ids:
                lines[player_id].append(SettlementLine(LABEL_SKINS_POT, 'No skins won • Returned', 0))
            return

        pot = wager * len(self.player_ids)
        pot_winners = [pid for pid in self.player_ids if counts[pid] == most]
        share = Fraction(pot, len(pot_winners))
        for player_id in self.player_ids:
            if player_id in pot_winners:
                sublabel = f'{counts[player_id]} skins • Won'
                if len(pot_winners) > 1:
                    sublabel = f'{counts[player_id]} skins • Split {len(pot_winners)} ways'
                amount = as_money(share - wager)
            else:
                sublabel = f'{counts[player_id]} skins • Lost'
                amount = -wager
            lines[player_id].append(SettlementLine(LABEL_SKINS_POT, sublabel, amount))

    def _bonus_lines(self, lines: dict[str, list[SettlementLine]]) -> None:
        wager = self.wager.wager_amount
        others = len(self.player_ids) - 1
        for hole in self.holes:
            if hole.number not in self.complete_holes:
                continue
            for holder in self.player_ids:
                score = self.ledger.hole_scores_for(holder, hole.number)
                earned = bonus_units(score, hole.par)
                if not earned:
                    continue
                units = sum(u for _, u in earned)
                kinds = ' + '.join(kind for kind, _ in earned)
                for player_id in self.player_ids:
                    if player_id == holder:
                        line = SettlementLine(
                            LABEL_BONUS_SKIN,
                            f'Hole {hole.number} • {kinds}',
                            units * wager * others,
                        )
                    else:
                        line = SettlementLine(
                            LABEL_BONUS_SKIN,
                            f'Hole {hole.number} • {self._name(holder)} {kinds}',
                            -units * wager,
                        )
                    lines[player_id].append(line)

    def _carry_lines(self, lines: dict[str, list[SettlementLine]]) -> None:
        if self.state.carry == 0:
            return
        start, last = self.state.carry_start, self.state.carry_last
        span = f'Hole {last}' if start == last else f'Holes {start}–{last}'
        status = 'Unclaimed' if self.round_complete else 'In play'
        for player_id in self.player_ids:
            lines[player_id].append(SettlementLine(LABEL_CARRYOVER, f'{span} • {status}', 0))

    def resolve(self) -> dict[str, list[SettlementLine]]:
        """Ledger lines for every player from skins, pot, bonus skins and carry."""
        lines: dict[str, list[SettlementLine]] = {pid: [] for pid in self.player_ids}

        if self.side_bets.pot_mode:
            self._pot_lines(lines)
        else:
            self._skin_lines(lines)
        if self.side_bets.bonus_skins:
            self._bonus_lines(lines)
        self._carry_lines(lines)

        logger.debug(
            f'Skins {self.snapshot.match_id}: {len(self.awards)} skins awarded, '
            f'carry {self.state.carry}'
        )
        return lines

    def skin_dots_for(self, hole_number: int, player_id: str) -> int:
        """Skin and bonus markers a player earned on a hole, for scorecard display."""
        dots = sum(
            award.holes_in_pot
            for award in self.awards
            if award.hole_number == hole_number and player_id in award.winners
        )
        if self.side_bets.bonus_skins and hole_number in self.complete_holes:
            hole = self.snapshot.hole(hole_number)
            score = self.ledger.hole_scores_for(player_id, hole_number)
            dots += sum(u for _, u in bonus_units(score, hole.par))
        return dots
