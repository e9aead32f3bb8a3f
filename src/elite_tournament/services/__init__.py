from .pairing import generate_round
from .roster import RosterService
from .runner import RunnerState, TournamentResult, TournamentRunner

__all__ = [
    "RosterService",
    "RunnerState",
    "TournamentResult",
    "TournamentRunner",
    "generate_round",
]
