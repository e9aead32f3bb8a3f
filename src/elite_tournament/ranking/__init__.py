"""Rating module for ELITE Tournament.

Integer Elo updates applied after every decided match.
"""

from elite_tournament.ranking.elo import (
    calculate_expected_win_chance,
    rating_changes,
    update_rating,
)

__all__ = [
    "calculate_expected_win_chance",
    "rating_changes",
    "update_rating",
]
