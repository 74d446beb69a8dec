"""Init config command for generating default configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from linear_issue_cli.config import USER_CONFIG_PATH, create_default_config

console = Console()
logger = logging.getLogger(__name__)


def init_config(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Output path for config file (default: {USER_CONFIG_PATH})",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing config file",
    ),
) -> None:
    """Generate a default configuration file."""

    config_path = Path(output) if output else USER_CONFIG_PATH.expanduser()

    if config_path.exists() and not force:
        console.print(f"[red]Configuration file already exists: {config_path}[/red]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as f:
            f.write(create_default_config())

    except OSError as e:
        console.print(f"[red]Failed to create configuration file: {e}[/red]")
        raise typer.Exit(1) from e

    logger.info("Wrote default configuration to %s", config_path)
    console.print(f"[green]✓[/green] Created configuration file: {config_path}")
    console.print("\n[dim]Add your API key, or set LINEAR_API_KEY in the environment.[/dim]")
    console.print("[dim]Then list your issues with: linear-issue issue list[/dim]")
