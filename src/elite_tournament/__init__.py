"""ELITE Tournament.

Single-elimination tournament rounds with random pairing, fair byes
and integer Elo ratings.
"""

from elite_tournament.models import Match, Player
from elite_tournament.ranking import update_rating
from elite_tournament.services import (
    RosterService,
    RunnerState,
    TournamentResult,
    TournamentRunner,
    generate_round,
)

__version__ = "0.1.0"
__all__ = [
    "Match",
    "Player",
    "RosterService",
    "RunnerState",
    "TournamentResult",
    "TournamentRunner",
    "__version__",
    "generate_round",
    "update_rating",
]
