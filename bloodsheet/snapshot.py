"""Load match snapshots from JSON and write settlements back out."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import get_auto_press_deficit, get_contest_pots, get_default_trash_value
from .models import (
    Hole,
    HoleScore,
    MatchPlayer,
    MatchSnapshot,
    Press,
    Settlement,
    SideBets,
    WagerConfig,
)
from .schemas import MatchSnapshotFile
from .utils import load_json, save_json

logger = logging.getLogger('bloodsheet.snapshot')


def snapshot_from_record(record: MatchSnapshotFile, default_handicap: float | None = None) -> MatchSnapshot:
    """
    Build an engine snapshot from a validated JSON record.

    Unset trash value, contest pots and auto-press deficit come from the
    settlement config. Players without a handicap index get default_handicap
    when one is given.
    """
    pots = get_contest_pots()
    bets = record.wager.side_bets

    side_bets = SideBets(
        greenies=bets.greenies,
        sandies=bets.sandies,
        snake=bets.snake,
        birdies_double=bets.birdies_double,
        bonus_skins=bets.bonus_skins,
        auto_press=bets.auto_press,
        auto_press_deficit=(
            bets.auto_press_deficit
            if bets.auto_press_deficit is not None
            else get_auto_press_deficit()
        ),
        par3_contest=bets.par3_contest,
        par3_pot=bets.par3_pot if bets.par3_pot is not None else pots[3],
        par5_contest=bets.par5_contest,
        par5_pot=bets.par5_pot if bets.par5_pot is not None else pots[5],
        team_skins=bets.team_skins,
        pot_mode=bets.pot_mode,
    )
    wager = WagerConfig(
        format=record.wager.format,
        wager_amount=record.wager.wager_amount,
        team_mode=record.wager.team_mode,
        side_bets=side_bets,
        trash_value=(
            bets.trash_value if bets.trash_value is not None else get_default_trash_value()
        ),
    )

    players = []
    for p in record.players:
        handicap_index = p.handicap_index
        if handicap_index is None and default_handicap is not None:
            logger.info(f'No handicap for {p.id}, using default {default_handicap}')
            handicap_index = default_handicap
        players.append(
            MatchPlayer(
                id=p.id,
                display_name=p.display_name or p.id,
                handicap_index=handicap_index,
                team=p.team,
                is_guest=p.is_guest,
            )
        )

    return MatchSnapshot(
        match_id=record.match_id,
        holes=[Hole(h.number, h.par, h.stroke_index) for h in record.course.holes],
        players=players,
        scores=[
            HoleScore(
                player_id=s.player_id,
                hole_number=s.hole_number,
                gross=s.gross,
                tags=frozenset(s.tags),
            )
            for s in record.scores
        ],
        wager=wager,
        presses=[Press(p.start_hole, p.pressed_by_team) for p in record.presses],
    )


def load_snapshot(path: Path | str, default_handicap: float | None = None) -> MatchSnapshot:
    """
    Load a match snapshot JSON file.

    Keys may be camelCase (as stored by the app) or snake_case.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file doesn't match the snapshot schema
    """
    record = load_json(path, schema=MatchSnapshotFile)
    snapshot = snapshot_from_record(record, default_handicap=default_handicap)
    logger.debug(
        f'Loaded {snapshot.match_id}: {len(snapshot.players)} players, '
        f'{len(snapshot.scores)} scores'
    )
    return snapshot


def load_snapshots(directory: Path | str, default_handicap: float | None = None) -> list[MatchSnapshot]:
    """Load every *.json snapshot in a directory, sorted by file name."""
    return [
        load_snapshot(path, default_handicap=default_handicap)
        for path in sorted(Path(directory).glob('*.json'))
    ]


def settlement_to_dict(settlement: Settlement) -> dict[str, Any]:
    """Plain-dict view of a settlement for JSON output."""
    return {
        'match_id': settlement.match_id,
        'format': settlement.format,
        'players': [
            {
                'player_id': player_id,
                'total': settlement.total_for(player_id),
                'lines': [
                    {
                        'label': line.label,
                        'sublabel': line.sublabel,
                        'amount': line.amount,
                        'is_press': line.is_press,
                        'pending': line.pending,
                    }
                    for line in lines
                ],
            }
            for player_id, lines in settlement.per_player_lines.items()
        ],
        'rejected_scores': [
            {
                'player_id': error.player_id,
                'hole_number': error.hole_number,
                'reason': str(error),
            }
            for error in settlement.rejected_scores
        ],
    }


def save_settlement(path: Path | str, settlement: Settlement) -> None:
    """Write a settlement to JSON, split-pot fractions as "n/d" strings."""
    data = settlement_to_dict(settlement)
    data['settled_at'] = datetime.now(timezone.utc).isoformat()
    save_json(path, data)
    logger.info(f'Settlement saved to {path}')
