"""Core configuration and errors for ELITE Tournament."""

from elite_tournament.core.config import (
    DEFAULT_K_FACTOR,
    DEFAULT_RATING,
    DEFAULT_ROSTER_KEY,
    StorageConfig,
    TournamentConfig,
    calculate_round_bounds,
    load_config,
    max_rounds,
    min_rounds,
    resolve_config,
    rounds_warning,
)
from elite_tournament.core.errors import (
    ConfigurationError,
    InvalidStateError,
    InvalidTransitionError,
    TournamentError,
    UnknownMatchError,
    UnknownPlayerError,
    ValidationError,
)

__all__ = [
    "DEFAULT_K_FACTOR",
    "DEFAULT_RATING",
    "DEFAULT_ROSTER_KEY",
    "StorageConfig",
    "TournamentConfig",
    "calculate_round_bounds",
    "load_config",
    "max_rounds",
    "min_rounds",
    "resolve_config",
    "rounds_warning",
    "ConfigurationError",
    "InvalidStateError",
    "InvalidTransitionError",
    "TournamentError",
    "UnknownMatchError",
    "UnknownPlayerError",
    "ValidationError",
]
