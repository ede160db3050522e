"""Settlement aggregator: one itemized, zero-sum ledger per match."""

import logging

from . import handicap
from .constants import FORMAT_NASSAU, FORMAT_SKINS, TEAM_MODE_FOURBALL
from .errors import InvalidCourse, InvalidWagerConfig
from .ledger import ScoreLedger
from .models import MatchSnapshot, Settlement, SettlementLine, as_money
from .nassau import MatchStatus, NassauResolver
from .net import derive_net_scores
from .side_bets import contest_lines, trash_lines
from .skins import SkinsResolver
from .validators import (
    validate_course,
    validate_players,
    validate_presses,
    validate_settlement,
    validate_wager_config,
)

logger = logging.getLogger('bloodsheet.settlement')


def check_snapshot(snapshot: MatchSnapshot) -> None:
    """
    Reject a snapshot that cannot be settled at all.

    Raises:
        InvalidWagerConfig: Bad format, amounts, team mode, roster or presses
        InvalidCourse: Hole list is not a valid 18-hole course
        IncompleteHandicapData: A player has no handicap index
    """
    errors = validate_wager_config(snapshot.wager)
    if errors:
        raise InvalidWagerConfig('; '.join(errors))

    errors = validate_course(snapshot.holes)
    if errors:
        raise InvalidCourse('; '.join(errors))

    errors = validate_players(snapshot.players, snapshot.wager) + validate_presses(snapshot.presses)
    if errors:
        raise InvalidWagerConfig('; '.join(errors))

    handicap.require_handicaps(snapshot.players)


def _merge(target: dict[str, list[SettlementLine]], source: dict[str, list[SettlementLine]]) -> None:
    for player_id, lines in source.items():
        target[player_id].extend(lines)


def settle(snapshot: MatchSnapshot, strict: bool = False) -> Settlement:
    """
    Compute the full itemized ledger for a match.

    Nassau matches get Nassau legs, presses and trash; skins matches get
    skins and trash. Par-3/par-5 contests apply to either. Malformed score
    rows are reported in ``rejected_scores`` (or raised when strict).

    Args:
        snapshot: One consistent view of the match
        strict: Raise on the first malformed score instead of skipping it

    Returns:
        Settlement with signed lines and totals per player

    Raises:
        InvalidWagerConfig, InvalidCourse, IncompleteHandicapData, and
        MalformedScore when strict
    """
    check_snapshot(snapshot)
    ledger = ScoreLedger(snapshot, strict=strict)
    wager = snapshot.wager

    if wager.format == FORMAT_NASSAU:
        nets = derive_net_scores(snapshot, ledger, team_play=wager.team_mode == TEAM_MODE_FOURBALL)
        parts = [NassauResolver(snapshot, ledger, nets).resolve()]
    else:
        nets = derive_net_scores(snapshot, ledger)
        parts = [SkinsResolver(snapshot, ledger, nets).resolve()]
    parts.append(trash_lines(snapshot, ledger))
    parts.append(contest_lines(snapshot, ledger))

    lines: dict[str, list[SettlementLine]] = {pid: [] for pid in snapshot.player_ids}
    for part in parts:
        _merge(lines, part)

    totals = {
        pid: as_money(sum(line.amount for line in player_lines))
        for pid, player_lines in lines.items()
    }

    settlement = Settlement(
        match_id=snapshot.match_id,
        format=wager.format,
        per_player_lines=lines,
        per_player_total=totals,
        rejected_scores=list(ledger.rejected),
    )

    for warning in validate_settlement(settlement):
        logger.error(warning)

    logger.info(
        f'Settled {snapshot.match_id} ({wager.format}): '
        + ', '.join(f'{pid} {total}' for pid, total in totals.items())
    )
    return settlement


def settle_many(snapshots) -> list[Settlement]:
    """Settle a batch of independent matches."""
    return [settle(snapshot) for snapshot in snapshots]


def is_stroke_hole(snapshot: MatchSnapshot, hole_number: int) -> bool:
    """Whether the hole gets a handicap stroke marker on the scorecard."""
    hole = snapshot.hole(hole_number)
    if hole is None:
        raise InvalidCourse(f'Hole {hole_number} is not on the course')
    return handicap.is_stroke_hole(snapshot.players, hole)


def skin_dots_for(snapshot: MatchSnapshot, hole_number: int, player_id: str) -> int:
    """Skin and bonus markers a player earned on a hole (0 outside skins)."""
    check_snapshot(snapshot)
    if snapshot.wager.format != FORMAT_SKINS:
        return 0
    ledger = ScoreLedger(snapshot)
    nets = derive_net_scores(snapshot, ledger)
    return SkinsResolver(snapshot, ledger, nets).skin_dots_for(hole_number, player_id)


def match_status(snapshot: MatchSnapshot) -> MatchStatus:
    """Holes up for team A in a Nassau match."""
    check_snapshot(snapshot)
    if snapshot.wager.format != FORMAT_NASSAU:
        raise InvalidWagerConfig('Match status only applies to nassau matches')
    ledger = ScoreLedger(snapshot)
    nets = derive_net_scores(
        snapshot, ledger, team_play=snapshot.wager.team_mode == TEAM_MODE_FOURBALL
    )
    return NassauResolver(snapshot, ledger, nets).status()
