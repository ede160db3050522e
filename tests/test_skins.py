"""Tests for skins: carry-overs, bonus skins, team skins and pot mode."""

from fractions import Fraction

import pytest

from bloodsheet.models import HoleScore, MatchPlayer, SideBets
from bloodsheet.settlement import settle, skin_dots_for
from bloodsheet.skins import bonus_units
from builders import build_scores, build_snapshot, par_round


def skins_match(players, grosses: dict[str, dict[int, int]], tags=None, wager_amount=5, **side_bets):
    tags = tags or {}
    scores = []
    for player_id, player_grosses in grosses.items():
        scores += build_scores(player_id, player_grosses, tags.get(player_id))
    return build_snapshot(
        players,
        scores,
        format='skins',
        wager_amount=wager_amount,
        side_bets=SideBets(**side_bets),
    )


def lines_of(settlement, player_id, label=None):
    return [
        (line.label, line.sublabel, line.amount)
        for line in settlement.lines_for(player_id)
        if label is None or line.label == label
    ]


class TestCarryOver:
    """Tests for tied holes carrying the pot forward."""

    def test_tie_carries_into_next_win(self, skins_players):
        """Test hole 1 tied, Alice wins hole 2 and collects two holes from each player."""
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 4, 2: 3}, 'p2': {1: 4, 2: 4}, 'p3': {1: 4, 2: 4}},
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1') == [('Skin', 'Holes 1–2 • Won', 20)]
        assert lines_of(settlement, 'p2') == [('Skin', 'Holes 1–2 • Alice', -10)]
        assert lines_of(settlement, 'p3') == [('Skin', 'Holes 1–2 • Alice', -10)]

    def test_open_carry_is_in_play(self, skins_players):
        snapshot = skins_match(skins_players, {'p1': {1: 4}, 'p2': {1: 4}, 'p3': {1: 4}})
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1') == [('Carryover', 'Hole 1 • In play', 0)]

    def test_carry_after_last_hole_is_unclaimed(self, skins_players):
        snapshot = skins_match(
            skins_players, {'p1': par_round(), 'p2': par_round(), 'p3': par_round()}
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1') == [('Carryover', 'Holes 1–18 • Unclaimed', 0)]
        assert settlement.total_for('p1') == 0

    def test_incomplete_hole_is_skipped(self, skins_players):
        """Test hole 2 missing two players does not break the carry from hole 1."""
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 4, 2: 3, 3: 3}, 'p2': {1: 4, 3: 2}, 'p3': {1: 4, 3: 3}},
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p2') == [('Skin', 'Holes 1–3 • Won', 20)]
        assert settlement.total_for('p1') == -10

    def test_order_invariance(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': par_round(h1=3, h5=3), 'p2': par_round(h2=3), 'p3': par_round(h5=3, h9=4)},
        )
        reordered = build_snapshot(
            skins_players,
            list(reversed(snapshot.scores)),
            format='skins',
            wager_amount=5,
        )
        assert settle(snapshot) == settle(reordered)


class TestBonusSkins:
    """Tests for birdie, eagle and pin bonus skins."""

    def test_bonus_units(self):
        assert bonus_units(HoleScore('p1', 1, 3), 4) == [('Birdie', 1)]
        assert bonus_units(HoleScore('p1', 4, 3), 5) == [('Eagle', 2)]
        assert bonus_units(HoleScore('p1', 1, 4, frozenset({'pin'})), 4) == [('Pin', 1)]
        assert bonus_units(HoleScore('p1', 1, 5), 4) == []

    def test_birdie_pays_on_top_of_skin(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 3}, 'p2': {1: 4}, 'p3': {1: 4}},
            bonus_skins=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1', 'Bonus Skin') == [('Bonus Skin', 'Hole 1 • Birdie', 10)]
        assert lines_of(settlement, 'p2', 'Bonus Skin') == [
            ('Bonus Skin', 'Hole 1 • Alice Birdie', -5)
        ]
        assert settlement.per_player_total == {'p1': 20, 'p2': -10, 'p3': -10}

    def test_eagle_is_two_units(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': {4: 3}, 'p2': {4: 5}, 'p3': {4: 5}},
            bonus_skins=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1', 'Bonus Skin') == [('Bonus Skin', 'Hole 4 • Eagle', 20)]
        assert settlement.total_for('p1') == 30

    def test_pin_pays_without_winning_hole(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 4}, 'p2': {1: 4}, 'p3': {1: 4}},
            tags={'p2': {1: ['pin']}},
            bonus_skins=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p2', 'Bonus Skin') == [('Bonus Skin', 'Hole 1 • Pin', 10)]
        assert settlement.per_player_total == {'p1': -5, 'p2': 10, 'p3': -5}

    def test_skin_dots(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 4, 2: 3}, 'p2': {1: 4, 2: 4}, 'p3': {1: 4, 2: 4}},
            bonus_skins=True,
        )
        assert skin_dots_for(snapshot, 2, 'p1') == 3
        assert skin_dots_for(snapshot, 1, 'p1') == 0
        assert skin_dots_for(snapshot, 2, 'p2') == 0

    def test_bonus_disabled(self, skins_players):
        snapshot = skins_match(skins_players, {'p1': {1: 3}, 'p2': {1: 4}, 'p3': {1: 4}})
        assert lines_of(settle(snapshot), 'p1', 'Bonus Skin') == []


class TestTeamSkins:
    """Tests for best-ball team skins."""

    def test_team_best_ball_wins(self):
        players = [
            MatchPlayer('p1', 'Alice', 0.0, 'A'),
            MatchPlayer('p2', 'Bob', 0.0, 'A'),
            MatchPlayer('p3', 'Cara', 0.0, 'B'),
            MatchPlayer('p4', 'Dev', 0.0, 'B'),
        ]
        snapshot = skins_match(
            players,
            {'p1': {1: 3}, 'p2': {1: 5}, 'p3': {1: 4}, 'p4': {1: 4}},
            team_skins=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p2') == [('Skin', 'Hole 1 • Won', 10)]
        assert lines_of(settlement, 'p3') == [('Skin', 'Hole 1 • Team A', -10)]
        assert sum(settlement.per_player_total.values()) == 0


class TestPotMode:
    """Tests for most-skins-takes-the-pot."""

    def test_most_skins_takes_pot(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': par_round(h1=3, h2=3), 'p2': par_round(h3=2), 'p3': par_round()},
            wager_amount=10,
            pot_mode=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1', 'Skins Pot') == [('Skins Pot', '2 skins • Won', 20)]
        assert lines_of(settlement, 'p2', 'Skins Pot') == [('Skins Pot', '1 skins • Lost', -10)]
        assert settlement.per_player_total == {'p1': 20, 'p2': -10, 'p3': -10}

    def test_tied_pot_splits_exactly(self, skins_players):
        players = skins_players + [MatchPlayer('p4', 'Dev', 0.0, 'A')]
        snapshot = skins_match(
            players,
            {
                'p1': par_round(h1=3),
                'p2': par_round(h2=3),
                'p3': par_round(h3=2),
                'p4': par_round(),
            },
            wager_amount=10,
            pot_mode=True,
        )
        settlement = settle(snapshot)
        assert settlement.total_for('p1') == Fraction(10, 3)
        assert settlement.total_for('p4') == -10
        assert sum(settlement.per_player_total.values()) == 0
        assert lines_of(settlement, 'p2', 'Skins Pot')[0][1] == '1 skins • Split 3 ways'

    def test_pot_pending_until_round_complete(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': {1: 3}, 'p2': {1: 4}, 'p3': {1: 4}},
            pot_mode=True,
        )
        settlement = settle(snapshot)
        pot_lines = [line for line in settlement.lines_for('p1') if line.label == 'Skins Pot']
        assert pot_lines[0].pending
        assert pot_lines[0].amount == 0
        assert settlement.total_for('p1') == 0

    def test_no_skins_returns_pot(self, skins_players):
        snapshot = skins_match(
            skins_players,
            {'p1': par_round(), 'p2': par_round(), 'p3': par_round()},
            pot_mode=True,
        )
        settlement = settle(snapshot)
        assert lines_of(settlement, 'p1', 'Skins Pot') == [
            ('Skins Pot', 'No skins won • Returned', 0)
        ]


@pytest.mark.parametrize('pot_mode', [False, True])
def test_skins_zero_sum(skins_players, pot_mode):
    snapshot = skins_match(
        skins_players,
        {'p1': par_round(h1=3, h7=2), 'p2': par_round(h4=4, h7=2), 'p3': par_round(h18=3)},
        tags={'p3': {16: ['pin']}},
        bonus_skins=True,
        pot_mode=pot_mode,
    )
    assert sum(settle(snapshot).per_player_total.values()) == 0
