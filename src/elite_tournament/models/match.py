"""Match records and their resolution state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from elite_tournament.models.player import Player


@dataclass(frozen=True)
class Unresolved:
    """Outcome of a match still waiting for a result."""


@dataclass(frozen=True)
class Resolved:
    """Outcome of a decided match.

    Attributes:
        winner: Snapshot of the winner, carrying the post-match rating.
    """

    winner: Player


MatchOutcome = Unresolved | Resolved


@dataclass
class Match:
    """A single pairing within one round.

    Attributes:
        player1: Snapshot of the first participant at pairing time.
        player2: Snapshot of the second participant at pairing time.
        outcome: Unresolved until a winner is recorded, then Resolved.
        id: Unique per match instance. Never persisted.
    """

    player1: Player
    player2: Player
    outcome: MatchOutcome = field(default_factory=Unresolved)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def is_resolved(self) -> bool:
        return isinstance(self.outcome, Resolved)

    @property
    def winner(self) -> Player | None:
        if isinstance(self.outcome, Resolved):
            return self.outcome.winner
        return None

    def participant(self, slot: int) -> Player:
        """Return the participant in slot 1 or 2."""
        if slot == 1:
            return self.player1
        if slot == 2:
            return self.player2
        msg = f"Match slot must be 1 or 2, got {slot}"
        raise ValueError(msg)

    def resolve(self, winner: Player) -> None:
        """Record the winner once.

        Args:
            winner: Snapshot of the winning participant.

        Raises:
            ValueError: If the match is already resolved or the winner did not
                take part in it.
        """
        if self.is_resolved:
            msg = f"Match {self.id} already has a winner"
            raise ValueError(msg)
        if winner.id not in (self.player1.id, self.player2.id):
            msg = f"Player {winner.id} is not a participant of match {self.id}"
            raise ValueError(msg)
        self.outcome = Resolved(winner=winner)
