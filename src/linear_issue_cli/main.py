"""Main CLI application entry point."""

import logging

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .commands.init_config import init_config
from .commands.issues import issues_app
from .config import ConfigLoader
from .errors import ConfigError

app = typer.Typer(
    name="linear-issue",
    help="List and create Linear issues from the terminal",
    add_completion=False,
)

app.add_typer(issues_app)
app.command(name="init-config")(init_config)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"linear-issue-cli version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """List and create Linear issues from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def info() -> None:
    """Show information about the CLI tool and its configuration."""
    loader = ConfigLoader()
    try:
        config = loader.load_config()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e

    table = Table(title="Linear Issue CLI Info")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Version", __version__)
    table.add_row("Python Package", "linear-issue-cli")
    table.add_row("Config File", str(loader.config_path) if loader.config_path else "none (defaults)")
    table.add_row("API URL", config.api_url)
    table.add_row("API Key", "configured" if config.api_key else "[red]missing[/red]")
    table.add_row("Editor", config.editor)

    console.print(table)


if __name__ == "__main__":
    app()
