"""Roster store protocol and shared snapshot encoding."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import pydantic
import structlog

from elite_tournament.models import Player

logger = structlog.get_logger()


@runtime_checkable
class RosterStore(Protocol):
    """Protocol for durable roster persistence.

    Every save replaces the previous snapshot in full; there are no partial
    updates.
    """

    def load(self) -> list[Player]:
        """Load the saved roster, or an empty list if nothing is stored."""
        ...

    def save(self, players: Sequence[Player]) -> None:
        """Replace the stored roster with ``players``."""
        ...

    def clear(self) -> None:
        """Remove the stored roster."""
        ...


def encode_roster(players: Sequence[Player]) -> str:
    """Serialize players as a JSON array of ``{id, name, currentElo}`` records."""
    return json.dumps([p.model_dump(by_alias=True) for p in players])


def decode_roster(payload: str | bytes | None) -> list[Player]:
    """Parse a stored roster blob.

    An unreadable blob is logged and treated as an empty roster.
    """
    if not payload:
        return []
    try:
        records = json.loads(payload)
        return [Player.model_validate(record) for record in records]
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError, pydantic.ValidationError) as e:
        logger.warning("roster_decode_failed", error=str(e))
        return []
