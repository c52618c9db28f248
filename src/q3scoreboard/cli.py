"""
q3scoreboard CLI - Command Line Interface for Quake 3 log summaries

Provides commands for:
- Summarizing matches of one or more log files as JSON
- Showing version and effective configuration
- Writing a default configuration file
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from q3scoreboard import __version__
from q3scoreboard.core.config import (
    Q3ScoreboardConfig,
    config_to_dict,
    generate_default_config,
    load_config,
)
from q3scoreboard.core.constants import ColorMode
from q3scoreboard.core.errors import ConfigError, format_error_chain
from q3scoreboard.core.utils import configure_logging
from q3scoreboard.pipeline import summarize_files

app = typer.Typer(
    name="q3scoreboard",
    help="Per-match scoreboards (kills, death causes, players) from Quake 3 server logs",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]q3scoreboard[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging on stderr"
    ),
) -> None:
    """q3scoreboard - Quake 3 Log Match Summaries"""
    ctx.obj = {"verbose": verbose}


def _load_config_or_exit(ctx: typer.Context, config_path: Optional[Path]) -> Q3ScoreboardConfig:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        err_console.print(format_error_chain(e), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    if ctx.obj and ctx.obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config.logging)
    return config


def _should_colorize(color: str) -> bool:
    if color == ColorMode.ALWAYS:
        return True
    if color == ColorMode.NEVER:
        return False
    return console.is_terminal


@app.command()
def summarize(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(
        ...,
        help="Log file(s) to read from",
    ),
    game: Optional[int] = typer.Option(
        None,
        "--game",
        "-g",
        min=1,
        help="Only show the match with this number"
    ),
    color: Optional[ColorMode] = typer.Option(
        None,
        "--color",
        help="Colorize JSON output: auto (when stdout is a terminal), always, never"
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (YAML, TOML or JSON)",
        dir_okay=False,
    ),
    no_finish: bool = typer.Option(
        False,
        "--no-finish",
        help="Don't output a last match that has no ShutdownGame line"
    ),
) -> None:
    """
    Summarize every match of the given log files as JSON.

    Each finished match is printed as:

        {"game_N": {"total_kills": ..., "players": [...],
                    "scores": [[name, score], ...], "death_causes": {...}}}

    When several files are given, a "==> file <==" header precedes each one.
    A malformed file stops at its first bad line; the remaining files are
    still processed and the exit status is 1.
    """
    config = _load_config_or_exit(ctx, config_path)

    # Command line arguments take precedence over config file and environment
    if game is not None:
        config.summary.game_to_show = game
    if color is not None:
        config.output.color = color
    if no_finish:
        config.summary.finish_unterminated = False

    colorize = _should_colorize(config.output.color)
    logger.debug(f"Summarizing {len(files)} file(s), colorize={colorize}")

    results = summarize_files(files, config, colorize=colorize)

    failed = [result for result in results if not result.ok]
    for result in failed:
        err_console.print(
            format_error_chain(result.error),
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    if failed:
        raise typer.Exit(1)


@app.command()
def info(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (YAML, TOML or JSON)",
        dir_okay=False,
    ),
) -> None:
    """
    Display version and the effective configuration.
    """
    config = _load_config_or_exit(ctx, config_path)

    console.print(f"\n[bold blue]q3scoreboard[/bold blue] v{__version__}\n")

    table = Table(title="Effective Configuration")
    table.add_column("Section", style="cyan")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    for section, values in config_to_dict(config).items():
        if not isinstance(values, dict):
            table.add_row(section, "", str(values))
            continue
        for key, value in values.items():
            table.add_row(section, key, "-" if value is None else str(value))

    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("q3scoreboard.yaml"),
        help="Where to write the configuration (.yaml, .toml or .json)",
        dir_okay=False,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file"
    ),
) -> None:
    """
    Write a default configuration file.
    """
    if path.exists() and not force:
        err_console.print(
            f"Error: {path} already exists (use --force to overwrite)",
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(1)

    try:
        generate_default_config(path)
    except (ConfigError, OSError) as e:
        err_console.print(format_error_chain(e), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    console.print(f"[green]Config written to:[/green] {path}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
