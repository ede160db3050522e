"""Validation functions for courses, match setup, score rows, and settlements."""

from .constants import (
    FORMAT_NASSAU,
    FORMAT_SKINS,
    FORMATS,
    HOLES_PER_ROUND,
    ROUND_HOLES,
    TEAM_MODE_SIZES,
    TEAMS,
    VALID_PARS,
)
from .models import Dot, Hole, HoleScore, MatchPlayer, Press, Settlement, WagerConfig


def validate_course(holes: tuple[Hole, ...] | list[Hole]) -> list[str]:
    """
    Validate that a hole list describes a full 18-hole course.

    Checks:
    - Exactly 18 holes numbered 1-18, no duplicates
    - Par of 3, 4 or 5 on every hole
    - Stroke indices form a permutation of 1-18

    Args:
        holes: Hole objects for the course

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if len(holes) != HOLES_PER_ROUND:
        errors.append(f'Course has {len(holes)} holes (expected {HOLES_PER_ROUND})')

    numbers = sorted(h.number for h in holes)
    if numbers != list(ROUND_HOLES):
        errors.append(f'Hole numbers must be 1-{HOLES_PER_ROUND} exactly once, got {numbers}')

    for hole in holes:
        if hole.par not in VALID_PARS:
            errors.append(f'Hole {hole.number} has par {hole.par} (must be 3, 4 or 5)')

    stroke_indices = sorted(h.stroke_index for h in holes)
    if stroke_indices != list(ROUND_HOLES):
        errors.append(
            f'Stroke indices must be a permutation of 1-{HOLES_PER_ROUND}, got {stroke_indices}'
        )

    return errors


def validate_wager_config(wager: WagerConfig) -> list[str]:
    """
    Validate the wager configuration on its own.

    Args:
        wager: WagerConfig to check

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if wager.format not in FORMATS:
        errors.append(f'Unknown format: {wager.format!r}')

    if isinstance(wager.wager_amount, bool) or not isinstance(wager.wager_amount, int):
        errors.append(f'Wager amount must be a whole number, got {wager.wager_amount!r}')
    elif wager.wager_amount <= 0:
        errors.append(f'Wager amount must be positive, got {wager.wager_amount}')

    if isinstance(wager.trash_value, bool) or not isinstance(wager.trash_value, int):
        errors.append(f'Trash value must be a whole number, got {wager.trash_value!r}')
    elif wager.trash_value < 0:
        errors.append(f'Trash value cannot be negative, got {wager.trash_value}')

    if wager.format == FORMAT_NASSAU and wager.team_mode not in TEAM_MODE_SIZES:
        errors.append(f'Nassau requires team mode 1v1 or 2v2, got {wager.team_mode!r}')
    if wager.format == FORMAT_SKINS and wager.team_mode is not None:
        errors.append(f'Team mode {wager.team_mode!r} does not apply to skins')

    side_bets = wager.side_bets
    if side_bets.auto_press and side_bets.auto_press_deficit < 1:
        errors.append(f'Auto-press deficit must be at least 1, got {side_bets.auto_press_deficit}')
    for name in ('par3_pot', 'par5_pot'):
        pot = getattr(side_bets, name)
        if isinstance(pot, bool) or not isinstance(pot, int) or pot < 0:
            errors.append(f'{name} must be a non-negative whole number, got {pot!r}')

    return errors


def validate_players(players: tuple[MatchPlayer, ...] | list[MatchPlayer], wager: WagerConfig) -> list[str]:
    """
    Validate the match roster against the wager format.

    Checks:
    - Unique player ids, valid team letters
    - Nassau: both teams sized exactly as the team mode requires
    - Skins: at least two players (and both teams populated for team skins)
    - Skins with trash bets: two populated teams must be the same size

    Args:
        players: Players in the match
        wager: Match wager configuration

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    seen = set()
    duplicates = set()
    for player in players:
        if player.id in seen:
            duplicates.add(player.id)
        seen.add(player.id)
        if player.team not in TEAMS:
            errors.append(f'Player {player.id} has invalid team {player.team!r}')

    if duplicates:
        errors.append(f'Duplicate players: {", ".join(sorted(duplicates))}')

    team_sizes = {team: sum(1 for p in players if p.team == team) for team in TEAMS}

    if wager.format == FORMAT_NASSAU and wager.team_mode in TEAM_MODE_SIZES:
        required = TEAM_MODE_SIZES[wager.team_mode]
        for team, size in team_sizes.items():
            if size != required:
                errors.append(
                    f'{wager.team_mode} needs {required} player(s) on team {team}, found {size}'
                )
    elif wager.format == FORMAT_SKINS:
        if len(players) < 2:
            errors.append(f'Skins needs at least 2 players, found {len(players)}')
        if wager.side_bets.team_skins and min(team_sizes.values()) == 0:
            errors.append('Team skins needs players on both teams')
        # Trash is paid team against team, so populated teams must be the same size
        side_bets = wager.side_bets
        trash_on = side_bets.greenies or side_bets.sandies or side_bets.snake
        sizes = list(team_sizes.values())
        if trash_on and min(sizes) > 0 and len(set(sizes)) > 1:
            errors.append(f'Trash bets need even teams, found {sizes[0]} v {sizes[1]}')

    return errors


def validate_presses(presses: tuple[Press, ...] | list[Press]) -> list[str]:
    """Check press start holes and pressing teams."""
    errors = []
    for press in presses:
        if press.start_hole not in ROUND_HOLES:
            errors.append(f'Press start hole {press.start_hole} is outside 1-{HOLES_PER_ROUND}')
        if press.pressed_by_team not in TEAMS:
            errors.append(f'Press pressed by invalid team {press.pressed_by_team!r}')
    return errors


def validate_score_row(
    score: HoleScore,
    hole_numbers: set[int],
    player_ids: set[str],
) -> list[str]:
    """
    Check a single hole-score row against the match.

    Args:
        score: Row to check
        hole_numbers: Hole numbers on the course
        player_ids: Ids of players in the match

    Returns:
        List of problems with the row (empty if usable)
    """
    problems = []

    if isinstance(score.gross, bool) or not isinstance(score.gross, int):
        problems.append(f'gross must be a whole number, got {score.gross!r}')
    elif score.gross < 1:
        problems.append(f'gross must be at least 1, got {score.gross}')

    if score.hole_number not in hole_numbers:
        problems.append(f'hole {score.hole_number} is not on the course')

    if score.player_id not in player_ids:
        problems.append(f'player {score.player_id} is not in the match')

    valid_dots = {dot.value for dot in Dot}
    unknown = sorted(str(tag) for tag in score.tags if tag not in valid_dots)
    if unknown:
        problems.append(f'unknown tags: {", ".join(unknown)}')

    return problems


def validate_settlement(settlement: Settlement) -> list[str]:
    """
    Check that a settlement is internally consistent.

    Sanity checks:
    - Each player's lines add up to their total
    - All totals sum to exactly zero

    Args:
        settlement: Settlement to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    for player_id, lines in settlement.per_player_lines.items():
        line_sum = sum(line.amount for line in lines)
        total = settlement.total_for(player_id)
        if line_sum != total:
            warnings.append(f'{player_id} lines sum to {line_sum} but total is {total}')

    grand_total = sum(settlement.per_player_total.values())
    if grand_total != 0:
        warnings.append(
            f'Match {settlement.match_id} is not zero-sum: totals add up to {grand_total}'
        )

    return warnings
