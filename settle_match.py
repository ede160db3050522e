#!/usr/bin/env python3
"""
BloodSheet match settlement CLI

Settles one match snapshot and prints each player's itemized ledger.

Usage:
    python settle_match.py matches/saturday.json
    python settle_match.py matches/saturday.json --output out/saturday.json --excel out/saturday.xlsx
    python settle_match.py matches/saturday.json --strict
"""

import argparse
import logging
import sys
from pathlib import Path

from bloodsheet import (
    SettlementError,
    export_settlement_xlsx,
    load_snapshot,
    save_settlement,
    settle,
    suggest_transfers,
)
from bloodsheet.config import get_config, get_log_dir
from bloodsheet.logging_config import setup_logging
from bloodsheet.utils import format_money


def print_settlement(snapshot, settlement) -> None:
    """Print every player's ledger lines, totals and who pays whom."""
    names = {p.id: p.display_name for p in snapshot.players}

    print("\n" + "=" * 60)
    print(f"SETTLEMENT: {settlement.match_id} ({settlement.format})")
    print("=" * 60)

    for player_id, lines in settlement.per_player_lines.items():
        print(f"\n{names[player_id]}")
        for line in lines:
            flag = " (pending)" if line.pending else ""
            print(f"  {line.label:<22} {line.sublabel:<36} {format_money(line.amount):>9}{flag}")
        print(f"  {'TOTAL':<59} {format_money(settlement.total_for(player_id)):>9}")

    transfers = suggest_transfers(settlement)
    if transfers:
        print("\nPAYMENTS")
        for t in transfers:
            print(f"  {names[t.from_player]} pays {names[t.to_player]} {format_money(t.amount)[1:]}")

    if settlement.rejected_scores:
        print("\nREJECTED SCORES")
        for error in settlement.rejected_scores:
            print(f"  {error}")


def main():
    parser = argparse.ArgumentParser(description="Settle a BloodSheet match snapshot")
    parser.add_argument(
        "snapshot",
        help="Path to the match snapshot JSON",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the settlement JSON here",
    )
    parser.add_argument(
        "--excel", "-x",
        default=None,
        help="Write an Excel ledger here",
    )
    parser.add_argument(
        "--default-handicap",
        type=float,
        default=None,
        help="Handicap index for players who have none",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed score instead of skipping it",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a log file to the configured log directory",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress the printed ledger",
    )

    args = parser.parse_args()

    level = logging.WARNING if args.quiet else getattr(logging, get_config().log_level)
    setup_logging(log_dir=get_log_dir(), level=level, log_to_file=args.log_file)

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        print(f"❌ Snapshot not found: {snapshot_path}")
        sys.exit(1)

    try:
        snapshot = load_snapshot(snapshot_path, default_handicap=args.default_handicap)
        settlement = settle(snapshot, strict=args.strict)
    except (SettlementError, ValueError) as e:
        print(f"❌ Cannot settle {snapshot_path}: {e}")
        sys.exit(1)

    if not args.quiet:
        print_settlement(snapshot, settlement)

    if args.output:
        save_settlement(args.output, settlement)
        print(f"Settlement saved to {args.output}")

    if args.excel:
        names = {p.id: p.display_name for p in snapshot.players}
        export_settlement_xlsx(args.excel, [settlement], names=names)
        print(f"Excel ledger saved to {args.excel}")


if __name__ == "__main__":
    main()
