"""File-based roster storage."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from elite_tournament.core.config import DEFAULT_ROSTER_KEY
from elite_tournament.models import Player

from .base import decode_roster, encode_roster

logger = structlog.get_logger()


class FileRosterStore:
    """Store the roster blob as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: str | Path, key: str = DEFAULT_ROSTER_KEY) -> None:
        self.base_dir = Path(base_dir)
        self.key = key

    @property
    def path(self) -> Path:
        return self.base_dir / f"{self.key}.json"

    def load(self) -> list[Player]:
        if not self.path.exists():
            return []
        players = decode_roster(self.path.read_bytes())
        logger.debug("roster_loaded", path=str(self.path), players=len(players))
        return players

    def save(self, players: Sequence[Player]) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        # Readers see either the old or the new snapshot, never a partial one
        tmp_path = self.path.with_suffix(".json.tmp")
        tmp_path.write_text(encode_roster(players), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug("roster_saved", path=str(self.path), players=len(players))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug("roster_cleared", path=str(self.path))
