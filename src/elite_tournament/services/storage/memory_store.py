"""In-memory roster store."""

from __future__ import annotations

from collections.abc import Sequence

from elite_tournament.core.config import DEFAULT_ROSTER_KEY
from elite_tournament.models import Player

from .base import decode_roster, encode_roster


class MemoryRosterStore:
    """Keeps the encoded roster blob in a dict, keyed like the durable stores."""

    def __init__(self, key: str = DEFAULT_ROSTER_KEY) -> None:
        self.key = key
        self.blobs: dict[str, str] = {}
        self.saves = 0

    def load(self) -> list[Player]:
        return decode_roster(self.blobs.get(self.key))

    def save(self, players: Sequence[Player]) -> None:
        self.blobs[self.key] = encode_roster(players)
        self.saves += 1

    def clear(self) -> None:
        self.blobs.pop(self.key, None)
