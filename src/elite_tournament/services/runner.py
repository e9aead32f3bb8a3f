"""Round lifecycle state machine for a single-elimination tournament.

The runner is driven entirely by caller-invoked operations:

    start -> AWAITING_RESULTS --record_result--> ROUND_COMPLETE
    ROUND_COMPLETE --advance_round--> AWAITING_RESULTS   (rounds remain)
    ROUND_COMPLETE --finish--> FINISHED                   (final round)

With ``auto_finish`` enabled (the default) the final round finishes as soon
as its last result is recorded. Every mutation hands a full roster snapshot
to the ``on_update`` callback so the caller can persist it.
"""

from __future__ import annotations

import random
import threading
from collections.abc import Callable, Iterable, Sequence
import dataclasses
from dataclasses import dataclass, field
from enum import Enum

import structlog

from elite_tournament.core.config import DEFAULT_K_FACTOR, calculate_round_bounds
from elite_tournament.core.errors import (
    InvalidStateError,
    InvalidTransitionError,
    UnknownMatchError,
)
from elite_tournament.models import Match, Player
from elite_tournament.ranking import update_rating
from elite_tournament.services.pairing import generate_round

logger = structlog.get_logger()

RosterCallback = Callable[[list[Player]], None]
PairingFunc = Callable[
    [Sequence[Player], Iterable[str], random.Random | None],
    tuple[list[Match], list[Player], set[str]],
]


class RunnerState(str, Enum):
    NOT_STARTED = "not_started"
    AWAITING_RESULTS = "awaiting_results"
    ROUND_COMPLETE = "round_complete"
    FINISHED = "finished"


@dataclass(frozen=True)
class TournamentResult:
    """How a tournament ended.

    Attributes:
        champion: The sole survivor, or None if several players remain
            because fewer rounds were played than needed.
        finalists: Everyone still standing after the last round.
        rounds_played: Number of the last round played.
    """

    champion: Player | None
    finalists: list[Player] = field(default_factory=list)
    rounds_played: int = 0


class TournamentRunner:
    """Drives one tournament from the first pairing to the champion.

    Attributes:
        k_factor: K-factor passed to every rating update.
        auto_finish: Finish automatically once the final round resolves.
    """

    def __init__(
        self,
        on_update: RosterCallback | None = None,
        k_factor: int = DEFAULT_K_FACTOR,
        rng: random.Random | None = None,
        pairing: PairingFunc = generate_round,
        auto_finish: bool = True,
    ) -> None:
        """Initialize the runner.

        Args:
            on_update: Receives the full roster snapshot after each mutation.
            k_factor: K-factor for rating updates.
            rng: Random source handed to the pairing function.
            pairing: Round generator, replaceable to inject fixed draws.
            auto_finish: Whether the final result finishes the tournament.
        """
        self.k_factor = k_factor
        self.auto_finish = auto_finish
        self._on_update = on_update
        self._rng = rng
        self._pairing = pairing
        self._lock = threading.RLock()

        self._state = RunnerState.NOT_STARTED
        self._roster: list[Player] = []
        self._active: list[Player] = []
        self._matches: list[Match] = []
        self._byes: list[Player] = []
        self._bye_history: set[str] = set()
        self._current_round = 0
        self._total_rounds = 0
        self._result: TournamentResult | None = None

    # ==================== Read-only state ====================

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def total_rounds(self) -> int:
        return self._total_rounds

    @property
    def matches(self) -> list[Match]:
        """Copies of the current round's matches. Results go through record_result."""
        return [dataclasses.replace(m) for m in self._matches]

    @property
    def byes(self) -> list[Player]:
        return list(self._byes)

    @property
    def active_players(self) -> list[Player]:
        return list(self._active)

    @property
    def roster(self) -> list[Player]:
        return list(self._roster)

    @property
    def bye_history(self) -> frozenset[str]:
        return frozenset(self._bye_history)

    @property
    def result(self) -> TournamentResult | None:
        return self._result

    @property
    def is_round_resolved(self) -> bool:
        return all(m.is_resolved for m in self._matches)

    @property
    def advancing_players(self) -> list[Player]:
        """Winners of the current round so far, followed by its byes."""
        winners = [m.winner for m in self._matches if m.winner is not None]
        return winners + self._byes

    @property
    def is_final_round(self) -> bool:
        return (
            self._current_round >= self._total_rounds
            or len(self.advancing_players) <= 1
        )

    def get_match(self, match_id: str) -> Match:
        """Copy of a match in the current round."""
        return dataclasses.replace(self._find_match(match_id))

    # ==================== Transitions ====================

    def start(
        self,
        players: Sequence[Player],
        total_rounds: int | None = None,
        roster: Sequence[Player] | None = None,
    ) -> None:
        """Start the tournament and draw round 1.

        Args:
            players: Distinct players entering the tournament.
            total_rounds: Rounds to play. Defaults to the maximum for the
                player count; must lie within its bounds.
            roster: Full roster to keep persisting, when ``players`` is only
                part of it. Defaults to ``players``.

        Raises:
            InvalidTransitionError: If the tournament was already started.
            InvalidStateError: If ids repeat or total_rounds is out of bounds.
        """
        with self._lock:
            self._require("start", RunnerState.NOT_STARTED)
            entrants = list(players)
            ids = [p.id for p in entrants]
            if len(set(ids)) != len(ids):
                msg = "Tournament players must have unique ids"
                raise InvalidStateError(msg)

            low, high = calculate_round_bounds(len(entrants))
            rounds = high if total_rounds is None else total_rounds
            if not low <= rounds <= high:
                msg = (
                    f"{rounds} rounds is outside the valid range "
                    f"[{low}, {high}] for {len(entrants)} players"
                )
                raise InvalidStateError(msg)

            self._roster = list(roster) if roster is not None else list(entrants)
            for player in entrants:
                self._upsert(player)
            self._active = entrants
            self._total_rounds = rounds
            self._current_round = 1
            self._bye_history = set()

            logger.info("tournament_started", players=len(entrants), total_rounds=rounds)

            if len(entrants) <= 1:
                # Nobody to play: the lone entrant (if any) advances unopposed
                self._matches = []
                self._byes = list(entrants)
                self._state = RunnerState.ROUND_COMPLETE
                self._finish()
                return

            self._draw_round(entrants)

    def record_result(self, match_id: str, winner_slot: int) -> Match:
        """Record the winner of a match and apply the rating update.

        Recording a result for a match that already has a winner does nothing.

        Args:
            match_id: ID of a match in the current round.
            winner_slot: 1 if player1 won, 2 if player2 won.

        Returns:
            A copy of the (possibly already) resolved match.

        Raises:
            InvalidTransitionError: If the tournament has not started.
            UnknownMatchError: If the match is not part of the current round.
            InvalidStateError: If winner_slot is not 1 or 2.
        """
        with self._lock:
            if self._state is RunnerState.NOT_STARTED:
                raise InvalidTransitionError("record a result", self._state.value)

            match = self._find_match(match_id)
            if match.is_resolved:
                logger.debug("duplicate_result_ignored", match_id=match_id)
                return dataclasses.replace(match)

            self._require("record a result", RunnerState.AWAITING_RESULTS)
            if winner_slot not in (1, 2):
                msg = f"Winner slot must be 1 or 2, got {winner_slot}"
                raise InvalidStateError(msg)

            winner = match.participant(winner_slot)
            loser = match.participant(3 - winner_slot)
            new_winner, new_loser = update_rating(winner, loser, k_factor=self.k_factor)
            match.resolve(new_winner)

            updated = {new_winner.id: new_winner, new_loser.id: new_loser}
            self._active = [updated.get(p.id, p) for p in self._active]
            self._upsert(new_winner)
            self._upsert(new_loser)

            logger.info(
                "result_recorded",
                round=self._current_round,
                winner=new_winner.name,
                winner_elo=new_winner.current_elo,
                loser=new_loser.name,
                loser_elo=new_loser.current_elo,
            )
            self._persist()

            if self.is_round_resolved:
                self._state = RunnerState.ROUND_COMPLETE
                logger.info(
                    "round_complete",
                    round=self._current_round,
                    advancing=len(self.advancing_players),
                )
                if self.auto_finish and self.is_final_round:
                    self._finish()

            return dataclasses.replace(match)

    def advance_round(self) -> None:
        """Move the round's winners and byes into the next round.

        Raises:
            InvalidTransitionError: If the round is unresolved or was the last.
        """
        with self._lock:
            self._require("advance the round", RunnerState.ROUND_COMPLETE)
            if self.is_final_round:
                raise InvalidTransitionError(
                    "advance the round",
                    self._state.value,
                    "final round reached, call finish()",
                )

            pool = self.advancing_players
            self._active = pool
            self._persist()
            self._current_round += 1
            self._draw_round(pool)

    def finish(self) -> TournamentResult:
        """End the tournament after its final round.

        Raises:
            InvalidTransitionError: If the round is unresolved or rounds remain.
        """
        with self._lock:
            self._require("finish", RunnerState.ROUND_COMPLETE)
            if not self.is_final_round:
                raise InvalidTransitionError(
                    "finish", self._state.value, "rounds remain to be played"
                )
            return self._finish()

    # ==================== Internals ====================

    def _find_match(self, match_id: str) -> Match:
        for match in self._matches:
            if match.id == match_id:
                return match
        raise UnknownMatchError(match_id)

    def _require(self, operation: str, expected: RunnerState) -> None:
        if self._state is not expected:
            raise InvalidTransitionError(operation, self._state.value)

    def _draw_round(self, pool: list[Player]) -> None:
        matches, byes, history = self._pairing(pool, self._bye_history, self._rng)
        self._matches = matches
        self._byes = byes
        self._bye_history = history
        self._state = RunnerState.AWAITING_RESULTS
        logger.info(
            "round_started",
            round=self._current_round,
            total_rounds=self._total_rounds,
            players=len(pool),
            matches=len(matches),
            byes=[p.name for p in byes],
        )

    def _finish(self) -> TournamentResult:
        finalists = self.advancing_players
        champion = finalists[0] if len(finalists) == 1 else None
        self._result = TournamentResult(
            champion=champion,
            finalists=finalists,
            rounds_played=self._current_round,
        )
        self._state = RunnerState.FINISHED
        self._persist()
        if champion is None:
            logger.warning(
                "tournament_finished_without_champion",
                finalists=[p.name for p in finalists],
            )
        else:
            logger.info(
                "tournament_finished",
                champion=champion.name,
                elo=champion.current_elo,
                rounds=self._current_round,
            )
        return self._result

    def _upsert(self, player: Player) -> None:
        for i, existing in enumerate(self._roster):
            if existing.id == player.id:
                self._roster[i] = player
                return
        self._roster.append(player)

    def _persist(self) -> None:
        if self._on_update is not None:
            self._on_update(list(self._roster))
