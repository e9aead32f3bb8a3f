"""Plain-text reports for rosters and rounds."""

from __future__ import annotations

from collections.abc import Sequence

from tabulate import tabulate

from elite_tournament.core.config import calculate_round_bounds
from elite_tournament.models import Match, Player
from elite_tournament.services.runner import TournamentResult, TournamentRunner


def generate_leaderboard(
    players: Sequence[Player],
    title: str = "Leaderboard",
    tablefmt: str = "github",
) -> str:
    """Render players ranked by rating, highest first.

    Args:
        players: Players to rank.
        title: Report title (markdown heading).
        tablefmt: tabulate table format.

    Returns:
        Markdown report content.
    """
    ranked = sorted(players, key=lambda p: p.current_elo, reverse=True)
    rows = [(rank, p.name, p.current_elo) for rank, p in enumerate(ranked, start=1)]

    lines = [f"# {title}", ""]
    if not rows:
        lines.append("No players yet.")
    else:
        lines.append(tabulate(rows, headers=("#", "Player", "Elo"), tablefmt=tablefmt))
    return "\n".join(lines)


def generate_roster_table(players: Sequence[Player], tablefmt: str = "github") -> str:
    """Render the roster in insertion order with short ids."""
    rows = [(p.id[:8], p.name, p.current_elo) for p in players]
    table = tabulate(rows, headers=("ID", "Player", "Elo"), tablefmt=tablefmt)
    low, high = calculate_round_bounds(len(players))
    return f"{table}\n\nValid rounds: {low} to {high} for {len(players)} players"


def describe_match(match: Match) -> str:
    """One-line summary, e.g. ``Ann (1000) vs Bob (1016) -> Bob``."""
    line = (
        f"{match.player1.name} ({match.player1.current_elo}) vs "
        f"{match.player2.name} ({match.player2.current_elo})"
    )
    if match.winner is not None:
        line += f" -> {match.winner.name}"
    return line


def generate_round_summary(runner: TournamentRunner) -> str:
    """Summarize the current round: header, matches and byes."""
    lines = [
        f"Round {runner.current_round} of {runner.total_rounds}",
        f"Players Remaining: {len(runner.active_players)}",
        "",
    ]
    for index, match in enumerate(runner.matches, start=1):
        lines.append(f"{index}. {describe_match(match)}")
    for bye in runner.byes:
        lines.append(f"Bye: {bye.name} advances this round")
    return "\n".join(lines)


def generate_result_summary(result: TournamentResult) -> str:
    if result.champion is not None:
        return (
            f"{result.champion.name} is the Champion! "
            f"(Elo {result.champion.current_elo}, {result.rounds_played} rounds)"
        )
    names = ", ".join(p.name for p in result.finalists) or "nobody"
    return f"No single champion after {result.rounds_played} rounds. Still standing: {names}"
