"""Roster management: the durable list of players and their ratings."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from elite_tournament.core.config import DEFAULT_RATING
from elite_tournament.core.errors import InvalidStateError, UnknownPlayerError
from elite_tournament.models import Player
from elite_tournament.services.storage import RosterStore

logger = structlog.get_logger()


class RosterService:
    """Owns the roster and writes a full snapshot after every mutation.

    Attributes:
        store: Backing roster store.
        initial_rating: Rating given to new players and restored by reset.
    """

    def __init__(self, store: RosterStore, initial_rating: int = DEFAULT_RATING) -> None:
        self.store = store
        self.initial_rating = initial_rating
        self._players: list[Player] = store.load()
        logger.info("roster_loaded", players=len(self._players))

    @property
    def players(self) -> list[Player]:
        """Players in insertion order."""
        return list(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def get(self, player_id: str) -> Player:
        for player in self._players:
            if player.id == player_id:
                return player
        raise UnknownPlayerError(player_id)

    def find(self, ref: str) -> Player:
        """Look a player up by id, id prefix, or exact name.

        Raises:
            UnknownPlayerError: If nothing matches or the reference is ambiguous.
        """
        if not ref.strip():
            raise UnknownPlayerError(ref)
        for player in self._players:
            if player.id == ref:
                return player
        matches = [p for p in self._players if p.id.startswith(ref) or p.name == ref]
        if len(matches) != 1:
            raise UnknownPlayerError(ref)
        return matches[0]

    def add_player(self, name: str) -> Player:
        """Add a player with the initial rating.

        Raises:
            InvalidStateError: If the trimmed name is empty.
        """
        name = name.strip()
        if not name:
            msg = "Player name cannot be empty"
            raise InvalidStateError(msg)
        player = Player(name=name, current_elo=self.initial_rating)
        self._players.append(player)
        self._save()
        logger.info("player_added", player_id=player.id, name=player.name)
        return player

    def rename_player(self, player_id: str, name: str) -> Player:
        if not name.strip():
            msg = "Player name cannot be empty"
            raise InvalidStateError(msg)
        index = self._index_of(player_id)
        renamed = self._players[index].with_name(name)
        self._players[index] = renamed
        self._save()
        logger.info("player_renamed", player_id=player_id, name=renamed.name)
        return renamed

    def remove_player(self, player_id: str) -> Player:
        removed = self._players.pop(self._index_of(player_id))
        self._save()
        logger.info("player_removed", player_id=player_id, name=removed.name)
        return removed

    def reset_ratings(self) -> None:
        """Put every player back at the initial rating."""
        self._players = [p.with_rating(self.initial_rating) for p in self._players]
        self._save()
        logger.info("ratings_reset", players=len(self._players), rating=self.initial_rating)

    def clear(self) -> None:
        """Remove every player and wipe the stored snapshot."""
        self._players = []
        self.store.clear()
        logger.info("roster_cleared")

    def replace(self, players: Sequence[Player]) -> None:
        """Adopt an updated roster snapshot, e.g. from a tournament runner.

        Suitable as a runner's ``on_update`` callback.
        """
        self._players = list(players)
        self._save()

    def leaderboard(self) -> list[Player]:
        """Players sorted by rating, highest first. Ties keep roster order."""
        return sorted(self._players, key=lambda p: p.current_elo, reverse=True)

    def _index_of(self, player_id: str) -> int:
        for i, player in enumerate(self._players):
            if player.id == player_id:
                return i
        raise UnknownPlayerError(player_id)

    def _save(self) -> None:
        self.store.save(self._players)
