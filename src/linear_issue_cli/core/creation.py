"""Interactive issue creation flow."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import TypeVar

from linear_issue_cli.api.client import IssueTrackerClient
from linear_issue_cli.api.models import CreatedIssue, IssueCreateInput, Project, Team
from linear_issue_cli.errors import NoTeamsError
from linear_issue_cli.prompts import Prompter

from .editor import TextEditor
from .pagination import paginated_request

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_background(fn: Callable[..., T], *args: object) -> Future[T]:
    """
    Run ``fn`` on a daemon thread and return a future for its result.

    The thread is never joined at interpreter exit, so an interrupted prompt
    ends the process without waiting for a request still in flight.
    """
    future: Future[T] = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args)
        except BaseException as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    threading.Thread(target=run, name=f"background-{fn.__name__}", daemon=True).start()
    return future


def fetch_teams_and_projects(client: IssueTrackerClient) -> tuple[list[Team], list[Project]]:
    """Fetch the viewer's teams and the projects accessible from them."""
    teams = paginated_request(client.viewer_teams, {})
    projects = paginated_request(
        client.projects,
        {"filter": {"accessibleTeams": {"id": {"in": [team.id for team in teams]}}}},
    )
    logger.debug("Fetched %d team(s) and %d project(s)", len(teams), len(projects))
    return teams, projects


def resolve_team(teams: list[Team], prompter: Prompter) -> Team:
    """Pick the team to file under; a single team is selected without asking."""
    if not teams:
        raise NoTeamsError("You are not a member of any team, so there is nowhere to file the issue")
    if len(teams) == 1:
        return teams[0]

    team_id = prompter.choose("Select a team", [(team.name, team.id) for team in teams])
    return next(team for team in teams if team.id == team_id)


def resolve_project(projects: list[Project], prompter: Prompter) -> Project | None:
    """Ask for the project; there is no shortcut even when only one exists."""
    if not projects:
        logger.info("No accessible projects, filing issue without a project")
        return None

    project_id = prompter.choose("Select a project", [(project.name, project.id) for project in projects])
    return next(project for project in projects if project.id == project_id)


def resolve_description(prompter: Prompter, editor: TextEditor) -> str | None:
    """Ask for inline text, the editor sentinel, or nothing."""
    answer = prompter.text(f"Body: ({editor.sentinel} to launch {editor.command}, enter to skip)")
    if answer == editor.sentinel:
        return editor.edit("")
    return answer or None


def create_issue(
    client: IssueTrackerClient,
    prompter: Prompter,
    editor: TextEditor,
    title: str | None = None,
    description: str | None = None,
) -> CreatedIssue:
    """
    Walk the user through creating an issue and submit it.

    Teams and projects are fetched in the background while the title prompt
    is open and awaited only once the title is known.

    Args:
        client: API client
        prompter: Source of interactive answers
        editor: Editor used when the user asks for one
        title: Issue title; prompted for when missing
        description: Issue description; prompted for when missing

    Returns:
        The created issue with the team and project it was filed under

    Raises:
        ApiError: If fetching teams/projects or the submission fails
        ValidationError: If input is unavailable or the viewer has no team
        EditorError: If the editor fails
    """
    pending = run_in_background(fetch_teams_and_projects, client)

    if not title:
        title = prompter.text("Issue title")

    try:
        teams, projects = pending.result()
    except Exception:
        logger.debug("Fetching teams and projects failed", exc_info=True)
        raise

    team = resolve_team(teams, prompter)
    project = resolve_project(projects, prompter)

    if not description:
        description = resolve_description(prompter, editor)

    state_id = team.default_state_id
    if state_id is None:
        default_state = client.team_default_state(team)
        state_id = default_state.id if default_state else None

    issue_input = IssueCreateInput(
        title=title,
        team_id=team.id,
        state_id=state_id,
        project_id=project.id if project else None,
        description=description,
    )
    logger.info("Submitting issue to team %s", team.name, extra={"team_id": team.id})

    try:
        issue = client.create_issue(issue_input)
    except Exception:
        logger.debug("Submitting issue failed", exc_info=True, extra={"team_id": team.id})
        raise

    return CreatedIssue(issue=issue, team=team, project=project)
