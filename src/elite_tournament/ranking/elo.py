"""Elo rating calculations for ELITE Tournament."""

from __future__ import annotations

from elite_tournament.core.config import DEFAULT_K_FACTOR
from elite_tournament.models import Player


def calculate_expected_win_chance(rating_a: float, rating_b: float) -> float:
    """Calculate expected win probability for player A against player B.

    Uses the standard Elo formula:
    E_A = 1 / (1 + 10^((R_B - R_A) / 400))

    Args:
        rating_a: Rating of player A.
        rating_b: Rating of player B.

    Returns:
        Probability that A wins (0.0 to 1.0).
    """
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400))


def rating_changes(
    winner_rating: int,
    loser_rating: int,
    k_factor: int = DEFAULT_K_FACTOR,
) -> tuple[int, int]:
    """Integer rating deltas for a decided match.

    Each side's adjustment is truncated toward zero, so the two deltas are not
    guaranteed to cancel out exactly.

    Args:
        winner_rating: Current rating of the winner.
        loser_rating: Current rating of the loser.
        k_factor: Maximum swing per match. Used as given, even when <= 0.

    Returns:
        Tuple of (winner_delta, loser_delta).
    """
    expected_winner = calculate_expected_win_chance(winner_rating, loser_rating)
    expected_loser = calculate_expected_win_chance(loser_rating, winner_rating)

    # int() truncates toward zero for both signs
    winner_delta = int(k_factor * (1 - expected_winner))
    loser_delta = int(k_factor * (0 - expected_loser))
    return winner_delta, loser_delta


def update_rating(
    winner: Player,
    loser: Player,
    k_factor: int = DEFAULT_K_FACTOR,
) -> tuple[Player, Player]:
    """Update Elo ratings after a match.

    Pure: the inputs are left untouched and updated copies are returned for
    the caller to write back.

    Args:
        winner: Snapshot of the winning player.
        loser: Snapshot of the losing player.
        k_factor: Maximum swing per match.

    Returns:
        Tuple of (updated_winner, updated_loser).
    """
    winner_delta, loser_delta = rating_changes(
        winner.current_elo, loser.current_elo, k_factor=k_factor
    )
    return (
        winner.with_rating(winner.current_elo + winner_delta),
        loser.with_rating(loser.current_elo + loser_delta),
    )
