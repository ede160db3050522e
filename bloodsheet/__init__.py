from .errors import (
    SettlementError,
    MalformedScore,
    IncompleteHandicapData,
    InvalidWagerConfig,
    InvalidCourse,
)
from .models import (
    Dot,
    Hole,
    MatchPlayer,
    HoleScore,
    Press,
    SideBets,
    WagerConfig,
    MatchSnapshot,
    SettlementLine,
    Settlement,
)
from .handicap import allowance, playing_handicap
from .nassau import MatchStatus
from .settlement import settle, settle_many, is_stroke_hole, skin_dots_for, match_status
from .history import (
    MatchPayout,
    LeaderRow,
    Transfer,
    match_history,
    money_leaders,
    leaders_from_snapshots,
    suggest_transfers,
)
from .snapshot import load_snapshot, load_snapshots, save_settlement
from .export import export_settlement_xlsx

__all__ = [
    # Errors
    'SettlementError',
    'MalformedScore',
    'IncompleteHandicapData',
    'InvalidWagerConfig',
    'InvalidCourse',
    # Models
    'Dot',
    'Hole',
    'MatchPlayer',
    'HoleScore',
    'Press',
    'SideBets',
    'WagerConfig',
    'MatchSnapshot',
    'SettlementLine',
    'Settlement',
    'MatchStatus',
    # Handicap
    'allowance',
    'playing_handicap',
    # Settlement
    'settle',
    'settle_many',
    'is_stroke_hole',
    'skin_dots_for',
    'match_status',
    # Cross-match
    'MatchPayout',
    'LeaderRow',
    'Transfer',
    'match_history',
    'money_leaders',
    'leaders_from_snapshots',
    'suggest_transfers',
    # JSON / Excel
    'load_snapshot',
    'load_snapshots',
    'save_settlement',
    'export_settlement_xlsx',
]
