"""Exceptions raised by the tournament engine and its configuration layer."""

from __future__ import annotations


class TournamentError(Exception):
    """Base exception for recoverable engine errors.

    The engine never leaves partial state behind when raising one of these.
    """


class InvalidStateError(TournamentError):
    """Error when an operation receives an illegal pool or argument."""


class UnknownMatchError(TournamentError):
    """Error when a result is recorded against a match that does not exist."""

    def __init__(self, match_id: str) -> None:
        self.match_id = match_id
        super().__init__(f"Unknown match '{match_id}' in the current round")


class UnknownPlayerError(TournamentError):
    """Error when a roster operation targets a player that does not exist."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"Unknown player '{player_id}'")


class InvalidTransitionError(TournamentError):
    """Error when the runner is asked to move from the wrong state."""

    def __init__(self, operation: str, state: str, reason: str | None = None) -> None:
        self.operation = operation
        self.state = state
        msg = f"Cannot {operation} while tournament is {state}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )
