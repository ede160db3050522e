#!/usr/bin/env python3
"""
BloodSheet money leaders CLI

Settles every snapshot in a directory and prints all-time winnings, or one
player's match-by-match history.

Usage:
    python money_leaders.py matches/
    python money_leaders.py matches/ --player p_jake
    python money_leaders.py matches/ --excel out/season.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

from bloodsheet import (
    SettlementError,
    export_settlement_xlsx,
    leaders_from_snapshots,
    load_snapshots,
    match_history,
    settle_many,
)
from bloodsheet.config import get_log_dir
from bloodsheet.logging_config import setup_logging
from bloodsheet.utils import format_money


def print_leaders(leaders) -> None:
    print("\n" + "=" * 60)
    print("MONEY LEADERS")
    print("=" * 60)
    if not leaders:
        print("  No completed matches yet")
        return
    for row in leaders:
        print(f"  {row.rank:>2}. {row.display_name:<24} {row.record:<12} {format_money(row.total):>9}")


def print_history(history, player_id: str) -> None:
    print("\n" + "=" * 60)
    print(f"MATCH HISTORY: {player_id}")
    print("=" * 60)
    if not history:
        print("  No matches found")
        return
    for item in history:
        print(f"  {item.match_id:<28} {item.status_label:<8} {format_money(item.payout):>9}")


def main():
    parser = argparse.ArgumentParser(description="All-time BloodSheet winnings from match snapshots")
    parser.add_argument(
        "directory",
        help="Directory of match snapshot JSON files",
    )
    parser.add_argument(
        "--player", "-p",
        default=None,
        help="Show one player's match history instead of the leaderboard",
    )
    parser.add_argument(
        "--default-handicap",
        type=float,
        default=None,
        help="Handicap index for players who have none",
    )
    parser.add_argument(
        "--excel", "-x",
        default=None,
        help="Write every match ledger to one workbook",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show engine debug logging",
    )

    args = parser.parse_args()

    setup_logging(
        log_dir=get_log_dir(),
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=False,
    )

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"❌ Not a directory: {directory}")
        sys.exit(1)

    try:
        snapshots = load_snapshots(directory, default_handicap=args.default_handicap)
        if args.player:
            print_history(match_history(snapshots, args.player), args.player)
        else:
            print_leaders(leaders_from_snapshots(snapshots))

        if args.excel:
            names = {p.id: p.display_name for s in snapshots for p in s.players}
            export_settlement_xlsx(args.excel, settle_many(snapshots), names=names)
            print(f"Excel ledger saved to {args.excel}")
    except (SettlementError, ValueError) as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
