"""Excel ledger export."""

import logging
import re
from fractions import Fraction
from pathlib import Path

import openpyxl
from openpyxl.styles import Font

from .models import Settlement

logger = logging.getLogger('bloodsheet.export')

HEADERS = ('Player', 'Bet', 'Detail', 'Amount', 'Press', 'Pending')
MAX_SHEET_TITLE = 31


def sheet_title(match_id: str, taken: set[str]) -> str:
    """
    Excel-safe, unique worksheet title for a match.

    Examples:
        sheet_title('round/1', set()) -> 'round-1'
    """
    base = re.sub(r'[\[\]:*?/\\]', '-', match_id).strip() or 'Match'
    base = base[:MAX_SHEET_TITLE]
    title = base
    suffix = 2
    while title in taken:
        tag = f' ({suffix})'
        title = base[: MAX_SHEET_TITLE - len(tag)] + tag
        suffix += 1
    return title


def _cell_amount(amount):
    if isinstance(amount, Fraction):
        return amount.numerator if amount.denominator == 1 else round(float(amount), 2)
    return amount


def export_settlement_xlsx(
    path: Path | str,
    settlements: list[Settlement],
    names: dict[str, str] | None = None,
) -> Path:
    """
    Write one worksheet per match with every ledger line and player totals.

    Args:
        path: Workbook to create (overwritten if it exists)
        settlements: Settled matches, one sheet each
        names: Optional player id -> display name

    Returns:
        Path of the written workbook
    """
    path = Path(path)
    names = names or {}
    bold = Font(bold=True)

    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    taken: set[str] = set()

    for settlement in settlements:
        title = sheet_title(settlement.match_id, taken)
        taken.add(title)
        ws = wb.create_sheet(title)

        for col, header in enumerate(HEADERS, 1):
            ws.cell(row=1, column=col, value=header).font = bold

        row = 2
        for player_id, lines in settlement.per_player_lines.items():
            name = names.get(player_id, player_id)
            for line in lines:
                ws.cell(row=row, column=1, value=name)
                ws.cell(row=row, column=2, value=line.label)
                ws.cell(row=row, column=3, value=line.sublabel)
                ws.cell(row=row, column=4, value=_cell_amount(line.amount))
                ws.cell(row=row, column=5, value='Yes' if line.is_press else '')
                ws.cell(row=row, column=6, value='Yes' if line.pending else '')
                row += 1

            total_cell = ws.cell(row=row, column=1, value=name)
            total_cell.font = bold
            ws.cell(row=row, column=2, value='Total').font = bold
            amount_cell = ws.cell(
                row=row, column=4, value=_cell_amount(settlement.total_for(player_id))
            )
            amount_cell.font = bold
            row += 2

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    wb.close()
    logger.info(f'Wrote {len(settlements)} match sheets to {path}')
    return path
