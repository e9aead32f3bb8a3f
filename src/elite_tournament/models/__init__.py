from .match import Match, MatchOutcome, Resolved, Unresolved
from .player import Player

__all__ = ["Match", "MatchOutcome", "Player", "Resolved", "Unresolved"]
