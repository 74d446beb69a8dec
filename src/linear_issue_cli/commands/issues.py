"""Issue-related commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.markup import escape

from linear_issue_cli.api.client import LinearClient
from linear_issue_cli.api.models import StateType
from linear_issue_cli.config import CliConfig, load_config
from linear_issue_cli.core.creation import create_issue
from linear_issue_cli.core.editor import TextEditor
from linear_issue_cli.core.listing import list_issues
from linear_issue_cli.errors import ApiError, ConfigError, EditorError, LinearCliError, ValidationError
from linear_issue_cli.formatters import build_table, formatter_registry
from linear_issue_cli.prompts import RichPrompter

console = Console()
logger = logging.getLogger(__name__)

EXIT_API_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_EDITOR_ERROR = 3
EXIT_INTERRUPTED = 130

issues_app = typer.Typer(
    name="issue",
    help="List and create Linear issues",
)

# Define typer options at module level to avoid B008
STATE_OPTION = typer.Option(
    None,
    "--state",
    "-s",
    help="Filter by issue state (repeatable). Default is everything except completed or canceled",
    case_sensitive=False,
)
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to configuration file")


def get_client(config: CliConfig) -> LinearClient:
    """Build the API client from configuration."""
    return LinearClient(config.require_api_key(), api_url=config.api_url)


def _load(config_path: str | None) -> CliConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(EXIT_VALIDATION_ERROR) from e
    except ConfigError as e:
        raise _fail("loading configuration", e) from e


def _fail(step: str, error: LinearCliError) -> typer.Exit:
    """Report an error for the given step and build the matching exit."""
    if isinstance(error, ApiError):
        console.print(f"[bold red]error[/bold red]: {step} failed: {escape(str(error))}")
        return typer.Exit(EXIT_API_ERROR)
    if isinstance(error, EditorError):
        console.print(f"[bold red]error[/bold red]: editor failed, the issue was not created: {escape(str(error))}")
        return typer.Exit(EXIT_EDITOR_ERROR)
    if isinstance(error, ValidationError):
        console.print(f"[bold red]error[/bold red]: {step}: {escape(str(error))}")
        return typer.Exit(EXIT_VALIDATION_ERROR)
    console.print(f"[bold red]error[/bold red]: {step} failed: {escape(str(error))}")
    return typer.Exit(EXIT_API_ERROR)


@issues_app.command("list")
def list_command(
    state: list[StateType] | None = STATE_OPTION,
    assignee: str | None = typer.Option(None, "--assignee", "-a", help="Assignee display name, or @me"),
    project: str | None = typer.Option(None, "--project", "-p", help="Project name"),
    output_format: str = typer.Option("console", "--format", "-f", help="Output format (console, json, csv)"),
    config: str | None = CONFIG_OPTION,
) -> None:
    """List issues, sorted by workflow state."""
    cli_config = _load(config)
    assignee = assignee or cli_config.default_assignee

    formatter = None
    if output_format != "console":
        formatter = formatter_registry.get_formatter(output_format)
        if formatter is None:
            available_formats = ", ".join(["console", *formatter_registry.list_formats()])
            console.print(f"[bold red]Unknown output format: {output_format}[/bold red]")
            console.print(f"Available formats: {available_formats}")
            raise typer.Exit(EXIT_VALIDATION_ERROR)

    try:
        client = get_client(cli_config)
        listing = list_issues(
            client,
            states=state or [],
            assignee=assignee,
            project=project,
            title_width=cli_config.title_width,
        )
    except LinearCliError as e:
        raise _fail("listing issues", e) from e

    if formatter is not None:
        if listing.is_empty:
            typer.echo("No issues found", err=True)
        typer.echo(formatter.format(listing))
        return

    if listing.is_empty:
        console.print("No issues found")
        return

    console.print(build_table(listing))


@issues_app.command("create")
def create_command(
    title: str | None = typer.Option(None, "--title", "-t", help="Issue title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Issue description"),
    config: str | None = CONFIG_OPTION,
) -> None:
    """Create an issue, prompting for anything not given on the command line."""
    cli_config = _load(config)
    editor = TextEditor(cli_config.editor, cli_config.editor_sentinel)

    try:
        client = get_client(cli_config)
        created = create_issue(client, RichPrompter(console), editor, title=title, description=description)
    except KeyboardInterrupt as e:
        console.print("\n[yellow]Aborted[/yellow]")
        raise typer.Exit(EXIT_INTERRUPTED) from e
    except LinearCliError as e:
        raise _fail("creating issue", e) from e

    project_name = created.project.name if created.project else "no project"
    console.print(
        f"Created issue [bold]{escape(created.issue.identifier)}[/bold] for project [bold]{escape(project_name)}[/bold]"
    )
    if created.issue.url:
        console.print(created.issue.url, markup=False)

    raise typer.Exit(0)
