"""Tests for Elo rating calculations."""

import pytest

from elite_tournament.models import Player
from elite_tournament.ranking.elo import (
    calculate_expected_win_chance,
    rating_changes,
    update_rating,
)


class TestCalculateExpectedWinChance:
    """Tests for expected win probability calculation."""

    def test_equal_ratings(self):
        """Test equal ratings produce 0.5 expected."""
        assert calculate_expected_win_chance(1000, 1000) == pytest.approx(0.5)

    def test_higher_rating_higher_expected(self):
        """Test higher rated player has higher expected score."""
        expected = calculate_expected_win_chance(1200, 1000)
        assert 0.5 < expected < 1.0

    def test_400_point_difference(self):
        """Test 400 point difference produces ~91% expected."""
        # 10^(400/400) = 10, so expected = 1/(1+0.1) ≈ 0.909
        assert calculate_expected_win_chance(1400, 1000) == pytest.approx(0.909, abs=0.001)

    def test_expectations_sum_to_one(self):
        """Test both sides' expectations are complementary."""
        a = calculate_expected_win_chance(1130, 987)
        b = calculate_expected_win_chance(987, 1130)
        assert a + b == pytest.approx(1.0)


class TestRatingChanges:
    """Tests for integer rating deltas."""

    def test_equal_ratings_default_k(self):
        """Test 1000 vs 1000 moves both players by exactly 16."""
        assert rating_changes(1000, 1000) == (16, -16)

    def test_favourite_wins_truncates_toward_zero(self):
        """Test both deltas truncate toward zero, not floor."""
        # 32 * 0.2403 = 7.69 for the winner, -7.69 for the loser
        assert rating_changes(1200, 1000) == (7, -7)

    def test_upset_win_larger_change(self):
        """Test an underdog win moves ratings more than half of K."""
        winner_delta, loser_delta = rating_changes(1000, 1200)
        assert (winner_delta, loser_delta) == (24, -24)

    def test_extreme_gap_no_change(self):
        """Test a near-certain result truncates to no change at all."""
        assert rating_changes(3000, 1000) == (0, 0)

    def test_zero_k_factor(self):
        """Test K of zero never moves ratings."""
        assert rating_changes(1000, 1000, k_factor=0) == (0, 0)

    def test_negative_k_factor_accepted(self):
        """Test a negative K is applied as given without validation."""
        assert rating_changes(1000, 1000, k_factor=-32) == (-16, 16)

    def test_custom_k_factor(self):
        """Test K scales the swing."""
        assert rating_changes(1000, 1000, k_factor=10) == (5, -5)


class TestUpdateRating:
    """Tests for Player rating updates."""

    def test_winner_gains_loser_loses(self):
        """Test 1000 vs 1000 with K=32 yields 1016 and 984."""
        winner = Player(name="Ann")
        loser = Player(name="Bob")

        new_winner, new_loser = update_rating(winner, loser, k_factor=32)

        assert new_winner.current_elo == 1016
        assert new_loser.current_elo == 984

    def test_inputs_unchanged(self):
        """Test the update returns copies and leaves the inputs alone."""
        winner = Player(name="Ann")
        loser = Player(name="Bob")

        update_rating(winner, loser)

        assert winner.current_elo == 1000
        assert loser.current_elo == 1000

    def test_identity_preserved(self):
        """Test updated copies keep id and name."""
        winner = Player(name="Ann")
        loser = Player(name="Bob")

        new_winner, new_loser = update_rating(winner, loser)

        assert (new_winner.id, new_winner.name) == (winner.id, "Ann")
        assert (new_loser.id, new_loser.name) == (loser.id, "Bob")

    def test_rematch_uses_updated_ratings(self):
        """Test a rematch computed from post-match ratings differs from the first."""
        ann = Player(name="Ann")
        bob = Player(name="Bob")

        ann, bob = update_rating(ann, bob)
        ann, bob = update_rating(ann, bob)

        # Second match: 1016 vs 984 is no longer an even contest
        assert (ann.current_elo, bob.current_elo) == (1030, 970)
