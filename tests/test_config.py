"""Tests for configuration loading and round bounds."""

import math

import pytest
import yaml

from elite_tournament.core.config import (
    StorageConfig,
    TournamentConfig,
    calculate_round_bounds,
    load_config,
    max_rounds,
    min_rounds,
    resolve_config,
    rounds_warning,
)
from elite_tournament.core.errors import ConfigurationError, ValidationError


class TestTournamentConfig:
    """Tests for TournamentConfig defaults."""

    def test_defaults(self):
        """Test the default engine settings."""
        config = TournamentConfig()

        assert config.k_factor == 32
        assert config.initial_rating == 1000
        assert config.rounds is None
        assert config.storage.backend == "file"
        assert config.storage.key == "savedPlayers.v1"

    def test_k_factor_not_range_checked(self):
        """Test non-positive K values are accepted as-is."""
        assert TournamentConfig(k_factor=0).k_factor == 0
        assert TournamentConfig(k_factor=-8).k_factor == -8

    def test_empty_storage_key_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            StorageConfig(key=" ")


class TestLoadConfig:
    """Tests for reading YAML configuration."""

    def test_load_valid(self, tmp_path):
        """Test a complete file loads into the schema."""
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "k_factor": 24,
                    "rounds": 3,
                    "seed": 7,
                    "storage": {"backend": "db", "db_url": "sqlite:///x.db"},
                }
            )
        )

        config = load_config(path)

        assert config.k_factor == 24
        assert config.rounds == 3
        assert config.seed == 7
        assert config.storage.backend == "db"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(path) == TournamentConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_value(self, tmp_path):
        """Test schema violations surface as ValidationError with the field."""
        path = tmp_path / "config.yaml"
        path.write_text("storage:\n  backend: s3\n")

        with pytest.raises(ValidationError, match="storage.backend"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_resolve_from_env(self, tmp_path, monkeypatch):
        """Test ELITE_CONFIG names the default config file."""
        path = tmp_path / "config.yaml"
        path.write_text("k_factor: 16\n")
        monkeypatch.setenv("ELITE_CONFIG", str(path))

        assert resolve_config().k_factor == 16

    def test_resolve_defaults(self, monkeypatch):
        monkeypatch.delenv("ELITE_CONFIG", raising=False)
        assert resolve_config() == TournamentConfig()


class TestRoundBounds:
    """Tests for round arithmetic."""

    @pytest.mark.parametrize("count", range(2, 70))
    def test_min_equals_max(self, count):
        """Test both bounds equal ceil(log2(n)) for n > 1."""
        expected = math.ceil(math.log2(count))
        assert min_rounds(count) == max_rounds(count) == expected
        assert calculate_round_bounds(count) == (expected, expected)

    @pytest.mark.parametrize(
        ("count", "expected"), [(0, 1), (1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4)]
    )
    def test_known_values(self, count, expected):
        assert max_rounds(count) == expected

    def test_warning_messages(self):
        """Test the user-facing rounds warnings."""
        assert rounds_warning(5, 3) is None
        assert rounds_warning(5, "3") is None
        assert rounds_warning(5, 2) == "Minimum rounds for 5 players is 3"
        assert rounds_warning(5, 4) == "Maximum rounds for 5 players is 3"
        assert rounds_warning(5, "three") == "Enter a valid number"
        assert rounds_warning(5, None) == "Enter a valid number"
