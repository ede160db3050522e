"""Unit tests for handicap stroke allocation and net scores."""

import pytest

from bloodsheet.errors import IncompleteHandicapData
from bloodsheet.handicap import (
    allocation_table,
    allowance,
    handicap_spread,
    is_stroke_hole,
    playing_handicap,
    relative_strokes,
    require_handicaps,
    team_strokes,
)
from bloodsheet.ledger import ScoreLedger
from bloodsheet.models import Hole, MatchPlayer
from bloodsheet.net import derive_net_scores
from builders import build_scores, build_snapshot


class TestPlayingHandicap:
    """Tests for rounding a handicap index to whole strokes."""

    def test_rounds_down_below_half(self):
        assert playing_handicap(12.4) == 12

    def test_half_rounds_up(self):
        assert playing_handicap(12.5) == 13
        assert playing_handicap(0.5) == 1

    def test_plus_handicap(self):
        """Test plus handicaps still round halves up."""
        assert playing_handicap(-1.5) == -1
        assert playing_handicap(-1.6) == -2


class TestAllowance:
    """Tests for strokes received per hole."""

    @pytest.mark.parametrize('stroke_index', range(1, 19))
    def test_scratch_gets_nothing(self, stroke_index):
        assert allowance(0, stroke_index) == 0

    @pytest.mark.parametrize('stroke_index', range(1, 19))
    def test_eighteen_gets_one_everywhere(self, stroke_index):
        assert allowance(18, stroke_index) == 1

    def test_twenty_doubles_two_hardest_holes(self):
        """Test 20 strokes: 2 on SI 1-2, 1 on SI 3-18."""
        assert allowance(20, 1) == 2
        assert allowance(20, 2) == 2
        assert allowance(20, 3) == 1
        assert allowance(20, 18) == 1

    def test_partial_handicap(self):
        assert allowance(7, 7) == 1
        assert allowance(7, 8) == 0

    def test_plus_handicap_gives_back_on_easiest_holes(self):
        assert allowance(-2, 16) == 0
        assert allowance(-2, 17) == -1
        assert allowance(-2, 18) == -1

    @pytest.mark.parametrize('hcp', [0, 7, 18, 20, 36, 40])
    def test_table_sums_to_handicap(self, hcp, course):
        assert sum(allocation_table(hcp, course).values()) == hcp


class TestRequireHandicaps:
    """Tests for missing handicap detection."""

    def test_missing_handicap_raises(self):
        players = [
            MatchPlayer('p1', 'Alice', 4.0, 'A'),
            MatchPlayer('p2', 'Bob', None, 'B'),
        ]
        with pytest.raises(IncompleteHandicapData) as exc_info:
            require_handicaps(players)
        assert exc_info.value.player_ids == ['p2']
        assert 'p2' in str(exc_info.value)

    def test_all_present(self, singles_players):
        require_handicaps(singles_players)


class TestTeamStrokes:
    """Tests for the 2v2 team stroke spot."""

    def test_weaker_team_gets_strokes(self, fourball_players, course):
        """Test A (10+12=22) vs B (5+6=11): A gets strokes on SI 1-11."""
        spot = team_strokes(fourball_players, course)
        assert spot.team == 'A'
        assert spot.difference == 11
        assert spot.holes == frozenset(range(1, 12))
        assert spot.applies('A', 11)
        assert not spot.applies('A', 12)
        assert not spot.applies('B', 1)

    def test_equal_teams_get_nothing(self, course):
        players = [
            MatchPlayer('p1', 'Alice', 8.0, 'A'),
            MatchPlayer('p2', 'Bob', 4.0, 'A'),
            MatchPlayer('p3', 'Cara', 6.0, 'B'),
            MatchPlayer('p4', 'Dev', 6.0, 'B'),
        ]
        spot = team_strokes(players, course)
        assert spot.team is None
        assert spot.holes == frozenset()

    def test_lowest_net_gets_team_stroke(self, fourball_players):
        """Test hole 1: Alice nets 4, Bob nets 5, so Alice takes the stroke."""
        scores = (
            build_scores('p1', {1: 5, 12: 5})
            + build_scores('p2', {1: 6, 12: 5})
            + build_scores('p3', {1: 4})
            + build_scores('p4', {1: 5})
        )
        snapshot = build_snapshot(fourball_players, scores, team_mode='2v2')
        nets = derive_net_scores(snapshot, ScoreLedger(snapshot), team_play=True)

        alice = nets.net_for('p1', 1)
        bob = nets.net_for('p2', 1)
        assert alice.net == 4
        assert alice.team_stroke == 1
        assert alice.adjusted_net == 3
        assert bob.net == 5
        assert bob.team_stroke == 0
        assert nets.net_for('p1', 12).team_stroke == 0

    def test_team_stroke_tie_goes_to_first_listed(self, fourball_players):
        scores = build_scores('p1', {2: 5}) + build_scores('p2', {2: 5})
        snapshot = build_snapshot(fourball_players, scores, team_mode='2v2')
        nets = derive_net_scores(snapshot, ScoreLedger(snapshot), team_play=True)
        assert nets.net_for('p1', 2).team_stroke == 1
        assert nets.net_for('p2', 2).team_stroke == 0

    def test_no_team_stroke_without_team_play(self, fourball_players):
        scores = build_scores('p1', {1: 5}) + build_scores('p2', {1: 6})
        snapshot = build_snapshot(fourball_players, scores, team_mode='2v2')
        nets = derive_net_scores(snapshot, ScoreLedger(snapshot))
        assert nets.net_for('p1', 1).team_stroke == 0


class TestStrokeHoleMarkers:
    """Tests for scorecard stroke markers."""

    def test_spread_marks_hardest_holes(self):
        players = [MatchPlayer('p1', 'Alice', 10.0, 'A'), MatchPlayer('p2', 'Bob', 4.0, 'B')]
        assert handicap_spread(players) == 6
        assert is_stroke_hole(players, Hole(number=5, par=4, stroke_index=6))
        assert not is_stroke_hole(players, Hole(number=9, par=4, stroke_index=7))

    def test_equal_handicaps_mark_nothing(self, singles_players):
        assert not is_stroke_hole(singles_players, Hole(number=1, par=4, stroke_index=1))

    def test_relative_strokes_off_lowest(self):
        players = [MatchPlayer('p1', 'Alice', 10.0, 'A'), MatchPlayer('p2', 'Bob', 4.0, 'B')]
        hole = Hole(number=5, par=4, stroke_index=5)
        assert relative_strokes(players, players[0], hole) == 1
        assert relative_strokes(players, players[1], hole) == 0
