"""CLI for ELITE Tournament."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler

from elite_tournament import __version__
from elite_tournament.core.config import (
    TournamentConfig,
    calculate_round_bounds,
    resolve_config,
    rounds_warning,
)
from elite_tournament.core.errors import ConfigurationError, TournamentError
from elite_tournament.services import RosterService, RunnerState, TournamentRunner
from elite_tournament.services.reporting import (
    describe_match,
    generate_leaderboard,
    generate_result_summary,
    generate_roster_table,
    generate_round_summary,
)
from elite_tournament.services.storage import create_store

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="elite-tournament",
    help="ELITE Tournament - single-elimination rounds with Elo tracking",
    add_completion=False,
)
console = Console()


@dataclass
class AppContext:
    config: TournamentConfig
    roster: RosterService


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"elite-tournament v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config YAML file (or set ELITE_CONFIG)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """ELITE Tournament CLI."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )

    try:
        config = resolve_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e

    store = create_store(config)
    ctx.obj = AppContext(
        config=config,
        roster=RosterService(store, initial_rating=config.initial_rating),
    )


def _roster(ctx: typer.Context) -> RosterService:
    return ctx.obj.roster


@app.command()
def add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Player display name")],
) -> None:
    """Add a player to the roster."""
    try:
        player = _roster(ctx).add_player(name)
    except TournamentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Added[/green] {player.name} ({player.current_elo}) [dim]{player.id}[/dim]")


@app.command()
def remove(
    ctx: typer.Context,
    player: Annotated[str, typer.Argument(help="Player id, id prefix or exact name")],
) -> None:
    """Remove a player from the roster."""
    roster = _roster(ctx)
    try:
        removed = roster.remove_player(roster.find(player).id)
    except TournamentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[yellow]Removed[/yellow] {removed.name}")


@app.command()
def rename(
    ctx: typer.Context,
    player: Annotated[str, typer.Argument(help="Player id, id prefix or exact name")],
    name: Annotated[str, typer.Argument(help="New display name")],
) -> None:
    """Rename a player."""
    roster = _roster(ctx)
    try:
        renamed = roster.rename_player(roster.find(player).id, name)
    except TournamentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Renamed[/green] to {renamed.name}")


@app.command("list")
def list_players(ctx: typer.Context) -> None:
    """Show the roster in the order players were added."""
    console.print(generate_roster_table(_roster(ctx).players))


@app.command()
def leaderboard(ctx: typer.Context) -> None:
    """Show players ranked by Elo."""
    console.print(generate_leaderboard(_roster(ctx).players))


@app.command()
def reset(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset every player's Elo to the initial rating."""
    roster = _roster(ctx)
    if not yes:
        typer.confirm(
            f"Reset Elo ratings to {roster.initial_rating} for all players?", abort=True
        )
    roster.reset_ratings()
    console.print(f"[green]Reset[/green] {len(roster)} players to {roster.initial_rating}")


@app.command()
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Remove every player. This cannot be undone."""
    if not yes:
        typer.confirm("Clear all players? This cannot be undone.", abort=True)
    _roster(ctx).clear()
    console.print("[yellow]Roster cleared[/yellow]")


@app.command()
def rounds(
    ctx: typer.Context,
    requested: Annotated[int | None, typer.Argument(help="Round count to check")] = None,
) -> None:
    """Show the valid round range for the current roster."""
    count = len(_roster(ctx))
    low, high = calculate_round_bounds(count)
    if requested is None:
        console.print(f"Valid rounds: {low} to {high} for {count} players")
        return
    warning = rounds_warning(count, requested)
    if warning:
        console.print(f"[red]{warning}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{requested} rounds is valid[/green] for {count} players")


def _prompt_winner(index: int, match_text: str) -> int:
    while True:
        answer = typer.prompt(f"Match {index}: {match_text} - winner [1/2]")
        if answer.strip() in ("1", "2"):
            return int(answer)
        console.print("[red]Enter 1 or 2[/red]")


@app.command()
def play(
    ctx: typer.Context,
    total_rounds: Annotated[
        int | None, typer.Option("--rounds", "-r", help="Number of rounds (default: max)")
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed for pairings")] = None,
) -> None:
    """Play a tournament with the whole roster, entering each winner."""
    config: TournamentConfig = ctx.obj.config
    roster = _roster(ctx)
    players = roster.players
    if len(players) < 2:
        console.print("[red]Add at least 2 players[/red]")
        raise typer.Exit(1)

    requested = total_rounds if total_rounds is not None else config.rounds
    if requested is None:
        requested = calculate_round_bounds(len(players))[1]
    warning = rounds_warning(len(players), requested)
    if warning:
        console.print(f"[red]{warning}[/red]")
        raise typer.Exit(1)

    seed = seed if seed is not None else config.seed
    runner = TournamentRunner(
        on_update=roster.replace,
        k_factor=config.k_factor,
        rng=random.Random(seed) if seed is not None else None,  # noqa: S311
    )

    try:
        runner.start(players, requested)
        while runner.state is not RunnerState.FINISHED:
            console.print(f"\n[bold]{generate_round_summary(runner)}[/bold]")
            for index, match in enumerate(runner.matches, start=1):
                if match.is_resolved:
                    continue
                slot = _prompt_winner(index, describe_match(match))
                resolved = runner.record_result(match.id, slot)
                console.print(f"  Winner: [bold yellow]{resolved.winner.name}[/bold yellow]")
            if runner.state is RunnerState.ROUND_COMPLETE:
                runner.advance_round()
    except TournamentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"\n[bold green]{generate_result_summary(runner.result)}[/bold green]\n")
    console.print(generate_leaderboard(roster.players))


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]ELITE Tournament[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Build a roster")
    console.print("  elite-tournament add Ann && elite-tournament add Bob\n")

    console.print("  # Check the valid number of rounds")
    console.print("  elite-tournament rounds\n")

    console.print("  # Play with reproducible pairings")
    console.print("  elite-tournament play --seed 7\n")

    console.print("  # Ratings so far")
    console.print("  elite-tournament leaderboard\n")

    console.print("  # Use a database-backed roster")
    console.print("  elite-tournament --config config.yaml list")


if __name__ == "__main__":
    app()
