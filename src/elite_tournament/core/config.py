"""Configuration schemas, loading and round arithmetic for ELITE Tournament."""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Literal

import pydantic
import yaml
from pydantic import BaseModel, Field, field_validator

from elite_tournament.core.errors import ConfigurationError, ValidationError

DEFAULT_RATING = 1000
DEFAULT_K_FACTOR = 32
DEFAULT_ROSTER_KEY = "savedPlayers.v1"
CONFIG_ENV_VAR = "ELITE_CONFIG"


class StorageConfig(BaseModel):
    """Where the roster snapshot lives.

    Attributes:
        backend: "file" (JSON file per key), "db" (SQLModel table) or "memory".
        path: Directory holding roster files for the file backend.
        db_url: SQLAlchemy URL for the db backend.
        key: Fixed key the roster blob is stored under.
    """

    backend: Literal["file", "db", "memory"] = "file"
    path: str = "./.elite"
    db_url: str = "sqlite:///./.elite/roster.db"
    key: str = DEFAULT_ROSTER_KEY

    @field_validator("key")
    @classmethod
    def validate_key_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Storage key cannot be empty")
        return v


class TournamentConfig(BaseModel):
    """Complete engine configuration.

    Attributes:
        k_factor: Maximum rating swing per match. Not range-checked.
        initial_rating: Rating given to new players and restored by a reset.
        rounds: Rounds to play. If None, uses the maximum for the roster size.
        seed: Random seed for reproducible pairings.
        storage: Roster store settings.
    """

    k_factor: int = DEFAULT_K_FACTOR
    initial_rating: int = DEFAULT_RATING
    rounds: int | None = Field(default=None, ge=1)
    seed: int | None = None
    storage: StorageConfig = Field(default_factory=StorageConfig)


def load_config(path: str | Path) -> TournamentConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated TournamentConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is not a mapping or fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}",
            "Write the configuration as 'key: value' pairs.",
        )

    try:
        return TournamentConfig.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ValidationError(field, first["msg"]) from e


def resolve_config(path: str | Path | None = None) -> TournamentConfig:
    """Load config from an explicit path, the ELITE_CONFIG env var, or defaults."""
    candidate = path or os.environ.get(CONFIG_ENV_VAR)
    if candidate:
        return load_config(candidate)
    return TournamentConfig()


def min_rounds(player_count: int) -> int:
    """Fewest rounds needed to reduce the roster to a single champion."""
    if player_count <= 1:
        return 1
    return math.ceil(math.log2(player_count))


def max_rounds(player_count: int) -> int:
    """Most rounds a single-elimination bracket can run.

    Equal to min_rounds: every round at least halves the pool, so the bracket
    is fixed by the player count.
    """
    if player_count <= 1:
        return 1
    return math.ceil(math.log2(player_count))


def calculate_round_bounds(player_count: int) -> tuple[int, int]:
    """Return (min_rounds, max_rounds) for a roster size."""
    return min_rounds(player_count), max_rounds(player_count)


def rounds_warning(player_count: int, rounds: int | str | None) -> str | None:
    """Explain why a requested round count is unusable, or None if it is valid.

    Args:
        player_count: Number of players entering the tournament.
        rounds: Requested rounds, possibly raw user input.

    Returns:
        Warning message, or None when rounds lies within the valid bounds.
    """
    try:
        value = int(rounds) if rounds is not None else None
    except (TypeError, ValueError):
        value = None
    if value is None:
        return "Enter a valid number"

    low, high = calculate_round_bounds(player_count)
    if value < low:
        return f"Minimum rounds for {player_count} players is {low}"
    if value > high:
        return f"Maximum rounds for {player_count} players is {high}"
    return None
