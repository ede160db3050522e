"""Cross-match folds over settled matches: history, money leaders and transfers."""

import logging
from dataclasses import dataclass

from .constants import FORMAT_NASSAU, TEAM_A
from .models import MatchSnapshot, Money, Settlement, as_money
from .settlement import match_status, settle

logger = logging.getLogger('bloodsheet.history')


@dataclass(frozen=True)
class MatchPayout:
    """One player's result in one match."""

    match_id: str
    format: str
    payout: Money
    holes_up: int = 0

    @property
    def result(self) -> str:
        if self.payout > 0:
            return 'W'
        if self.payout < 0:
            return 'L'
        return 'P'

    @property
    def status_label(self) -> str:
        if self.format != FORMAT_NASSAU:
            return self.format.upper()
        if self.holes_up == 0:
            return 'A/S'
        return f'{abs(self.holes_up)} {"UP" if self.holes_up > 0 else "DN"}'


@dataclass
class LeaderRow:
    """All-time money line for one player."""

    player_id: str
    display_name: str
    total: Money = 0
    matches: int = 0
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    rank: int = 0

    @property
    def record(self) -> str:
        record = f'{self.wins}W-{self.losses}L'
        if self.pushes:
            record += f'-{self.pushes}P'
        return record


@dataclass(frozen=True)
class Transfer:
    """A single suggested payment between two players."""

    from_player: str
    to_player: str
    amount: Money


def match_history(snapshots, player_id: str) -> list[MatchPayout]:
    """
    Per-match payout for one player, in the order the snapshots are given.

    Matches the player is not entered in are skipped. For Nassau matches
    holes_up is measured from the player's own team.
    """
    history = []
    for snapshot in snapshots:
        player = snapshot.player(player_id)
        if player is None:
            continue
        settlement = settle(snapshot)
        holes_up = 0
        if snapshot.wager.format == FORMAT_NASSAU:
            status = match_status(snapshot)
            holes_up = status.holes_up if player.team == TEAM_A else -status.holes_up
        history.append(
            MatchPayout(
                match_id=snapshot.match_id,
                format=snapshot.wager.format,
                payout=settlement.total_for(player_id),
                holes_up=holes_up,
            )
        )
    logger.debug(f'History for {player_id}: {len(history)} matches')
    return history


def money_leaders(settlements, names: dict[str, str] | None = None) -> list[LeaderRow]:
    """
    Fold settlements into all-time totals, highest earner first.

    Players level on money share a rank. Ties are listed by player id so
    the order does not depend on the order of the settlements.
    """
    names = names or {}
    rows: dict[str, LeaderRow] = {}

    for settlement in settlements:
        for player_id, total in settlement.per_player_total.items():
            row = rows.get(player_id)
            if row is None:
                row = LeaderRow(player_id=player_id, display_name=names.get(player_id, player_id))
                rows[player_id] = row
            row.total = as_money(row.total + total)
            row.matches += 1
            if total > 0:
                row.wins += 1
            elif total < 0:
                row.losses += 1
            else:
                row.pushes += 1

    leaders = sorted(rows.values(), key=lambda r: (-r.total, r.player_id))
    for position, row in enumerate(leaders, 1):
        if position > 1 and row.total == leaders[position - 2].total:
            row.rank = leaders[position - 2].rank
        else:
            row.rank = position
    return leaders


def leaders_from_snapshots(snapshots: list[MatchSnapshot]) -> list[LeaderRow]:
    """Settle every snapshot and rank the players by total winnings."""
    names = {}
    for snapshot in snapshots:
        for player in snapshot.players:
            names.setdefault(player.id, player.display_name)
    return money_leaders([settle(s) for s in snapshots], names=names)


def suggest_transfers(settlement: Settlement) -> list[Transfer]:
    """
    Minimal-ish list of payments that squares a settlement.

    Biggest debtor pays biggest creditor until one of them is square, then
    moves on. Amounts stay exact, so nothing is lost to rounding.

    Example:
        totals {a: 20, b: -15, c: -5}
        -> b pays a 15, c pays a 5
    """
    debtors = sorted(
        ([pid, -total] for pid, total in settlement.per_player_total.items() if total < 0),
        key=lambda d: (-d[1], d[0]),
    )
    creditors = sorted(
        ([pid, total] for pid, total in settlement.per_player_total.items() if total > 0),
        key=lambda c: (-c[1], c[0]),
    )

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = min(debtor[1], creditor[1])
        transfers.append(Transfer(debtor[0], creditor[0], as_money(amount)))
        debtor[1] -= amount
        creditor[1] -= amount
        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    logger.debug(f'{settlement.match_id}: {len(transfers)} transfers')
    return transfers
