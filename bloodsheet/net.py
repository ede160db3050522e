"""Net score derivation: gross minus handicap allowance (plus the 2v2 team stroke)."""

import logging
from dataclasses import dataclass

from .handicap import allocation_table, playing_handicap, require_handicaps, team_strokes
from .ledger import ScoreLedger
from .models import MatchSnapshot

logger = logging.getLogger('bloodsheet.net')


@dataclass(frozen=True)
class NetScore:
    """Derived scoring for one player on one hole."""

    player_id: str
    hole_number: int
    par: int
    gross: int
    allowance: int
    team_stroke: int = 0

    @property
    def net(self) -> int:
        """Individual net, used for skins and 1v1."""
        return self.gross - self.allowance

    @property
    def adjusted_net(self) -> int:
        """Net after the team stroke, used for 2v2 team comparisons."""
        return self.net - self.team_stroke

    @property
    def is_birdie_or_better(self) -> bool:
        return self.gross < self.par


class NetScoreCard:
    """
    Net scores for every recorded hole of a match.

    Allowances are computed once per player from the full 18-hole allocation
    table. With team_play, the weaker 2v2 team's lowest net scorer on each
    team-stroke hole gets one more stroke (first listed player on ties).
    """

    def __init__(self, snapshot: MatchSnapshot, ledger: ScoreLedger, team_play: bool = False):
        require_handicaps(snapshot.players)
        self.snapshot = snapshot
        self._nets: dict[tuple[str, int], NetScore] = {}

        pars = {h.number: h.par for h in snapshot.holes}
        for player in snapshot.players:
            table = allocation_table(playing_handicap(player.handicap_index), snapshot.holes)
            for hole_number, strokes in table.items():
                score = ledger.hole_scores_for(player.id, hole_number)
                if score is None:
                    continue
                self._nets[(player.id, hole_number)] = NetScore(
                    player_id=player.id,
                    hole_number=hole_number,
                    par=pars[hole_number],
                    gross=score.gross,
                    allowance=strokes,
                )

        self.team_strokes = None
        if team_play:
            self.team_strokes = team_strokes(snapshot.players, snapshot.holes)
            self._apply_team_strokes()

    def _apply_team_strokes(self) -> None:
        spot = self.team_strokes
        if spot.team is None:
            return

        members = [p.id for p in self.snapshot.team_members(spot.team)]
        for hole_number in sorted(spot.holes):
            nets = self.nets_on_hole(members, hole_number)
            if len(nets) != len(members):
                continue
            # min() keeps the first of equal values, i.e. the first listed player
            receiver = min(nets, key=lambda n: n.net)
            self._nets[(receiver.player_id, hole_number)] = NetScore(
                player_id=receiver.player_id,
                hole_number=hole_number,
                par=receiver.par,
                gross=receiver.gross,
                allowance=receiver.allowance,
                team_stroke=1,
            )
            logger.debug(f'Team stroke on hole {hole_number} to {receiver.player_id}')

    def net_for(self, player_id: str, hole_number: int) -> NetScore | None:
        return self._nets.get((player_id, hole_number))

    def nets_on_hole(self, player_ids: list[str], hole_number: int) -> list[NetScore]:
        """Recorded net scores on a hole, in the order the players are listed."""
        nets = []
        for player_id in player_ids:
            net = self._nets.get((player_id, hole_number))
            if net is not None:
                nets.append(net)
        return nets


def derive_net_scores(
    snapshot: MatchSnapshot,
    ledger: ScoreLedger,
    team_play: bool = False,
) -> NetScoreCard:
    """Build the net score card for a match."""
    return NetScoreCard(snapshot, ledger, team_play=team_play)
