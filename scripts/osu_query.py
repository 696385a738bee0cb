"""CLI entry point for querying the osu! API from a terminal.

Usage::

    OSU_CLIENT_ID=123 OSU_CLIENT_SECRET=... python scripts/osu_query.py user peppy
    python scripts/osu_query.py rankings --mode mania --country DE --page 2 \\
        --config client.yaml
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from osuapi.client.builder import OsuBuilder
from osuapi.client.osu import Osu
from osuapi.config.settings import ClientConfig
from osuapi.exceptions import ConfigError, OsuError
from osuapi.logger import set_log_level
from osuapi.model.enums import GameMode
from osuapi.model.ranking import Rankings
from osuapi.model.user import User

app = typer.Typer(help="osu! API v2 query CLI.")
console = Console()


def _load_config(config_path: Path | None) -> ClientConfig:
    """Load credentials and options from a YAML file or the environment.

    Args:
        config_path: Optional YAML configuration file.

    Returns:
        Validated configuration carrying credentials.

    Raises:
        typer.BadParameter: If the configuration is invalid or lacks credentials.
    """
    try:
        if config_path is not None:
            config = ClientConfig.from_yaml(config_path)
        else:
            config = ClientConfig.from_env()
    except (ConfigError, FileNotFoundError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    if config.client_id is None or config.client_secret is None:
        raise typer.BadParameter(
            "Credentials missing: set OSU_CLIENT_ID and OSU_CLIENT_SECRET "
            "or provide them in --config"
        )
    return config


async def _build_client(config: ClientConfig) -> Osu:
    return await OsuBuilder.from_config(config).build()


def build_user_table(user: User) -> Table:
    table = Table(title=f"{user.username} ({user.user_id})")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Country", user.country_code or "-")
    table.add_row("Mode", user.playmode or "-")
    stats = user.statistics
    if stats is not None:
        table.add_row("PP", f"{stats.pp:.2f}" if stats.pp is not None else "-")
        table.add_row("Global rank", str(stats.global_rank or "-"))
        table.add_row(
            "Accuracy",
            f"{stats.hit_accuracy:.2f}%" if stats.hit_accuracy is not None else "-",
        )
        table.add_row("Play count", str(stats.play_count or "-"))
    return table


def build_rankings_table(rankings: Rankings) -> Table:
    mode = rankings.mode.value if rankings.mode is not None else "?"
    table = Table(title=f"Performance rankings ({mode})")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Player", style="cyan")
    table.add_column("Country")
    table.add_column("PP", justify="right")

    for stats in rankings.ranking:
        user = stats.user
        table.add_row(
            str(stats.global_rank or "-"),
            user.username if user is not None else "-",
            (user.country_code or "-") if user is not None else "-",
            f"{stats.pp:.2f}" if stats.pp is not None else "-",
        )
    return table


@app.command()
def user(
    name: str = typer.Argument(..., help="Username or numeric user id"),
    mode: GameMode | None = typer.Option(None, "--mode", "-m", help="Game mode"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Client configuration YAML"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
) -> None:
    """Show a user profile."""
    set_log_level(log_level)
    client_config = _load_config(config)
    user_id: int | str = int(name) if name.isdigit() else name

    async def _run() -> User:
        async with await _build_client(client_config) as osu:
            request = osu.user(user_id)
            if mode is not None:
                request = request.mode(mode)
            return await request

    try:
        result = asyncio.run(_run())
    except OsuError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(build_user_table(result))


@app.command()
def rankings(
    mode: GameMode = typer.Option(GameMode.OSU, "--mode", "-m", help="Game mode"),
    country: str | None = typer.Option(None, "--country", help="Country code"),
    page: int | None = typer.Option(None, "--page", min=1, max=200, help="Page"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Client configuration YAML"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
) -> None:
    """Show the performance leaderboard."""
    set_log_level(log_level)
    client_config = _load_config(config)

    async def _run() -> Rankings:
        async with await _build_client(client_config) as osu:
            request = osu.performance_rankings(mode)
            if country is not None:
                request = request.country(country)
            if page is not None:
                request = request.page(page)
            return await request

    try:
        result = asyncio.run(_run())
    except OsuError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(build_rankings_table(result))


if __name__ == "__main__":
    app()
