"""Side bets: trash dots (greenies, sandies, snake) and par-3/par-5 contests."""

import logging

from .constants import LABEL_GREENIES, LABEL_SANDIES, LABEL_SNAKE, TEAM_A, TEAM_B
from .ledger import ScoreLedger
from .models import Dot, MatchSnapshot, SettlementLine

logger = logging.getLogger('bloodsheet.side_bets')

# Dot -> (side-bet switch, ledger label, holding it is a penalty)
# PIN only feeds bonus skins.
TRASH_RULES = {
    Dot.GREENIE: ('greenies', LABEL_GREENIES, False),
    Dot.SANDIE: ('sandies', LABEL_SANDIES, False),
    Dot.SNAKE: ('snake', LABEL_SNAKE, True),
    Dot.PIN: None,
}


def trash_amount(
    my_dots: int,
    opp_dots: int,
    trash_value: int,
    my_team_size: int,
    opp_team_size: int,
    penalty: bool = False,
) -> int:
    """
    Amount one player on "my" side receives (+) or pays (-) for a trash bet.

    Won net dots are paid by each opposing player, so a positive net is
    scaled by the opposing team size and a negative one by my team size.
    A zero scaled product falls back to the unscaled amount. For a penalty
    dot (snake) the sign is inverted and the opposing team size scales it.

    Examples:
        trash_amount(3, 1, 5, 2, 2) -> 20
        trash_amount(2, 0, 5, 1, 1, penalty=True) -> -10
    """
    if penalty:
        return (opp_dots - my_dots) * trash_value * opp_team_size

    net_dots = my_dots - opp_dots
    scaled = net_dots * trash_value * (opp_team_size if net_dots > 0 else my_team_size)
    return scaled or net_dots * trash_value


def trash_lines(snapshot: MatchSnapshot, ledger: ScoreLedger) -> dict[str, list[SettlementLine]]:
    """
    Team-vs-team trash lines for each enabled dot.

    Dots are counted over every recorded score in the round. A dot with no
    tags on either side produces no line.
    """
    lines: dict[str, list[SettlementLine]] = {pid: [] for pid in snapshot.player_ids}
    side_bets = snapshot.wager.side_bets
    teams = {team: [p.id for p in snapshot.team_members(team)] for team in (TEAM_A, TEAM_B)}

    if not teams[TEAM_A] or not teams[TEAM_B]:
        return lines

    for dot, rule in TRASH_RULES.items():
        if rule is None:
            continue
        switch, label, penalty = rule
        if not getattr(side_bets, switch):
            continue

        counts = {team: len(ledger.scores_with(dot, ids)) for team, ids in teams.items()}
        if counts[TEAM_A] == 0 and counts[TEAM_B] == 0:
            continue

        for team, opponent in ((TEAM_A, TEAM_B), (TEAM_B, TEAM_A)):
            mine, theirs = counts[team], counts[opponent]
            amount = trash_amount(
                mine,
                theirs,
                snapshot.wager.trash_value,
                len(teams[team]),
                len(teams[opponent]),
                penalty=penalty,
            )
            if penalty:
                if mine > theirs:
                    sublabel = 'You held the snake'
                elif theirs > mine:
                    sublabel = 'Opponent held the snake'
                else:
                    sublabel = 'Even'
            else:
                sublabel = f'{mine} won, {theirs} lost'
            for player_id in teams[team]:
                lines[player_id].append(SettlementLine(label, sublabel, amount))

        logger.debug(f'{label}: team A {counts[TEAM_A]}, team B {counts[TEAM_B]}')

    return lines


def _relative_to_par(strokes: int, par_total: int) -> str:
    diff = strokes - par_total
    if diff == 0:
        return 'E'
    return f'+{diff}' if diff > 0 else str(diff)


def contest_lines(snapshot: MatchSnapshot, ledger: ScoreLedger) -> dict[str, list[SettlementLine]]:
    """
    Par-3 and par-5 contests: lowest gross total on those holes, no handicap.

    A contest is decided once every par-N hole is complete for every player.
    The unique low total collects the pot from each other player; a tie pays
    nothing.
    """
    lines: dict[str, list[SettlementLine]] = {pid: [] for pid in snapshot.player_ids}
    side_bets = snapshot.wager.side_bets
    player_ids = snapshot.player_ids

    if len(player_ids) < 2:
        return lines

    for par, enabled, pot in (
        (3, side_bets.par3_contest, side_bets.par3_pot),
        (5, side_bets.par5_contest, side_bets.par5_pot),
    ):
        if not enabled:
            continue
        holes = sorted(h.number for h in snapshot.holes if h.par == par)
        if not holes:
            continue
        if not all(ledger.is_hole_complete(player_ids, h) for h in holes):
            continue

        totals = {
            pid: sum(ledger.hole_scores_for(pid, h).gross for h in holes) for pid in player_ids
        }
        par_total = par * len(holes)
        low = min(totals.values())
        winners = [pid for pid in player_ids if totals[pid] == low]
        label = f'Par {par} Contest'

        if len(winners) > 1:
            for pid in player_ids:
                lines[pid].append(
                    SettlementLine(label, f'Tied at {_relative_to_par(low, par_total)} • No payout', 0)
                )
            continue

        winner = winners[0]
        winner_name = snapshot.player(winner).display_name
        for pid in player_ids:
            if pid == winner:
                line = SettlementLine(
                    label,
                    f'Won at {_relative_to_par(low, par_total)}',
                    pot * (len(player_ids) - 1),
                )
            else:
                line = SettlementLine(
                    label,
                    f'{winner_name} wins at {_relative_to_par(low, par_total)} '
                    f'(you: {_relative_to_par(totals[pid], par_total)})',
                    -pot,
                )
            lines[pid].append(line)

    return lines
