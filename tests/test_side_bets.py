"""Tests for trash dots and par-3/par-5 contests."""

import pytest

from bloodsheet.ledger import ScoreLedger
from bloodsheet.models import MatchPlayer, SideBets
from bloodsheet.settlement import settle
from bloodsheet.side_bets import contest_lines, trash_amount, trash_lines
from builders import build_scores, build_snapshot, par_round


class TestTrashAmount:
    """Tests for the trash scaling rule."""

    def test_won_dots_scaled_by_opponents(self):
        """Test 3 dots to 1 at $5 against two opponents: +$20."""
        assert trash_amount(3, 1, 5, 2, 2) == 20

    def test_lost_dots_scaled_by_own_team(self):
        assert trash_amount(1, 3, 5, 2, 2) == -20
        assert trash_amount(0, 1, 5, 1, 2) == -5

    def test_even_dots_pay_nothing(self):
        assert trash_amount(2, 2, 5, 2, 2) == 0

    def test_zero_scale_falls_back_to_unscaled(self):
        """Test an empty opposing side still yields the unscaled amount."""
        assert trash_amount(1, 0, 5, 1, 0) == 5

    def test_snake_holder_pays(self):
        assert trash_amount(2, 0, 5, 1, 1, penalty=True) == -10
        assert trash_amount(0, 2, 5, 1, 1, penalty=True) == 10

    def test_snake_scaled_by_opposing_team(self):
        assert trash_amount(1, 0, 5, 2, 2, penalty=True) == -10
        assert trash_amount(0, 1, 5, 2, 2, penalty=True) == 10


class TestTrashLines:
    """Tests for trash lines on the ledger."""

    def test_snake_sign(self, singles_players):
        scores = build_scores('p1', {5: 6}, tags={5: ['snake']}) + build_scores('p2', {5: 4})
        snapshot = build_snapshot(singles_players, scores, side_bets=SideBets(snake=True))
        settlement = settle(snapshot)

        snake_p1 = [line for line in settlement.lines_for('p1') if line.label == 'Snake']
        snake_p2 = [line for line in settlement.lines_for('p2') if line.label == 'Snake']
        assert snake_p1[0].sublabel == 'You held the snake'
        assert snake_p1[0].amount == -5
        assert snake_p2[0].sublabel == 'Opponent held the snake'
        assert snake_p2[0].amount == 5
        assert settlement.per_player_total == {'p1': -5, 'p2': 5}

    def test_greenies_and_sandies(self, fourball_players):
        scores = (
            build_scores('p1', {3: 3, 7: 3}, tags={3: ['greenie'], 7: ['greenie', 'sandie']})
            + build_scores('p3', {11: 3}, tags={11: ['greenie']})
        )
        snapshot = build_snapshot(
            fourball_players,
            scores,
            team_mode='2v2',
            side_bets=SideBets(greenies=True, sandies=True),
        )
        lines = trash_lines(snapshot, ScoreLedger(snapshot))

        assert [(line.label, line.sublabel, line.amount) for line in lines['p1']] == [
            ('Greenies', '2 won, 1 lost', 10),
            ('Sandies', '1 won, 0 lost', 10),
        ]
        assert [(line.label, line.sublabel, line.amount) for line in lines['p4']] == [
            ('Greenies', '1 won, 2 lost', -10),
            ('Sandies', '0 won, 1 lost', -10),
        ]

    def test_disabled_dot_is_ignored(self, singles_players):
        scores = build_scores('p1', {3: 3}, tags={3: ['greenie', 'sandie']})
        snapshot = build_snapshot(singles_players, scores, side_bets=SideBets(greenies=True))
        lines = trash_lines(snapshot, ScoreLedger(snapshot))
        assert [line.label for line in lines['p1']] == ['Greenies']

    def test_no_dots_no_line(self, singles_players):
        snapshot = build_snapshot(
            singles_players,
            build_scores('p1', {1: 4}),
            side_bets=SideBets(greenies=True, sandies=True, snake=True),
        )
        lines = trash_lines(snapshot, ScoreLedger(snapshot))
        assert lines == {'p1': [], 'p2': []}

    def test_pin_is_not_trash(self, singles_players):
        scores = build_scores('p1', {3: 3}, tags={3: ['pin']})
        snapshot = build_snapshot(
            singles_players, scores, side_bets=SideBets(greenies=True, sandies=True, snake=True)
        )
        assert trash_lines(snapshot, ScoreLedger(snapshot)) == {'p1': [], 'p2': []}


class TestContests:
    """Tests for par-3 and par-5 gross contests."""

    @pytest.fixture
    def trio(self):
        return [
            MatchPlayer('p1', 'Alice', 0.0, 'A'),
            MatchPlayer('p2', 'Bob', 20.0, 'A'),
            MatchPlayer('p3', 'Cara', 0.0, 'B'),
        ]

    def contest_snapshot(self, players, grosses, **side_bets):
        scores = []
        for player_id, player_grosses in grosses.items():
            scores += build_scores(player_id, player_grosses)
        return build_snapshot(
            players, scores, format='skins', side_bets=SideBets(**side_bets)
        )

    def test_low_gross_wins_par3_pot(self, trio):
        snapshot = self.contest_snapshot(
            trio,
            {'p1': par_round(h3=2), 'p2': par_round(), 'p3': par_round(h16=4)},
            par3_contest=True,
        )
        lines = contest_lines(snapshot, ScoreLedger(snapshot))
        assert [(line.label, line.sublabel, line.amount) for line in lines['p1']] == [
            ('Par 3 Contest', 'Won at -1', 10)
        ]
        assert [(line.sublabel, line.amount) for line in lines['p2']] == [('Alice wins at -1 (you: E)', -5)]
        assert [(line.sublabel, line.amount) for line in lines['p3']] == [('Alice wins at -1 (you: +1)', -5)]

    def test_contest_ignores_handicap(self, trio):
        """Test Bob's 20 handicap does not help him in a gross contest."""
        snapshot = self.contest_snapshot(
            trio,
            {'p1': par_round(), 'p2': par_round(h4=6), 'p3': par_round(h9=4)},
            par5_contest=True,
            par5_pot=10,
        )
        lines = contest_lines(snapshot, ScoreLedger(snapshot))
        assert lines['p3'][0].amount == 20
        assert lines['p2'][0].amount == -10

    def test_tie_pays_nothing(self, trio):
        snapshot = self.contest_snapshot(
            trio,
            {'p1': par_round(), 'p2': par_round(), 'p3': par_round()},
            par3_contest=True,
        )
        lines = contest_lines(snapshot, ScoreLedger(snapshot))
        assert [(line.sublabel, line.amount) for line in lines['p1']] == [('Tied at E • No payout', 0)]

    def test_undecided_until_every_par3_complete(self, trio):
        snapshot = self.contest_snapshot(
            trio,
            {'p1': par_round(range(1, 16), h3=2), 'p2': par_round(), 'p3': par_round()},
            par3_contest=True,
        )
        assert contest_lines(snapshot, ScoreLedger(snapshot)) == {'p1': [], 'p2': [], 'p3': []}

    def test_contest_applies_to_nassau(self, singles_players):
        scores = build_scores('p1', par_round(h3=2)) + build_scores('p2', par_round())
        snapshot = build_snapshot(singles_players, scores, side_bets=SideBets(par3_contest=True))
        settlement = settle(snapshot)
        contest = [line for line in settlement.lines_for('p1') if line.label == 'Par 3 Contest']
        assert contest[0].amount == 5
