"""Issue listing flow."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from linear_issue_cli.api.client import IssueTrackerClient
from linear_issue_cli.api.models import Issue, IssueListing, IssueSummary, State, StateType, User

from .filters import VIEWER, build_issue_query
from .pagination import paginated_request

logger = logging.getLogger(__name__)

ISSUE_STATE_ORDER = [state.value for state in StateType]
TITLE_WIDTH = 64
ELLIPSIS = "…"


def truncate(text: str, width: int = TITLE_WIDTH) -> str:
    """Shorten ``text`` to at most ``width`` characters, ellipsis included."""
    if len(text) <= width:
        return text
    return text[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS


def state_rank(state_type: str | None) -> int:
    """Position of a state type in the listing order; unknown types rank first."""
    try:
        return ISSUE_STATE_ORDER.index(state_type)  # type: ignore[arg-type]
    except ValueError:
        return 0


def sort_by_state(summaries: Iterable[IssueSummary]) -> list[IssueSummary]:
    """Stable sort by state rank."""
    return sorted(summaries, key=lambda s: state_rank(s.state_type))


def resolve_relations(
    client: IssueTrackerClient, issues: list[Issue]
) -> list[tuple[User | None, State | None]]:
    """
    Look up assignee and state of every issue concurrently.

    All lookups are submitted at once; results are returned in the order of
    ``issues``.
    """
    if not issues:
        return []

    with ThreadPoolExecutor(max_workers=len(issues) * 2) as executor:
        futures = [
            (executor.submit(client.issue_assignee, issue), executor.submit(client.issue_state, issue))
            for issue in issues
        ]
        return [(assignee.result(), state.result()) for assignee, state in futures]


def summarize(issue: Issue, assignee: User | None, state: State | None, width: int = TITLE_WIDTH) -> IssueSummary:
    """Build the listing row for one issue."""
    return IssueSummary(
        identifier=issue.identifier,
        title=truncate(issue.title, width),
        status=state.name if state else None,
        assignee=assignee.display_name if assignee else None,
        state_type=state.type if state else None,
    )


def list_issues(
    client: IssueTrackerClient,
    states: Iterable[StateType | str] = (),
    assignee: str = VIEWER,
    project: str | None = None,
    title_width: int = TITLE_WIDTH,
) -> IssueListing:
    """
    List issues matching the given filters, sorted by state.

    Args:
        client: API client
        states: State types to include; empty means all but completed and canceled
        assignee: ``@me`` or a display name fragment
        project: Project name fragment
        title_width: Maximum title length in the summaries

    Returns:
        Listing whose ``is_empty`` is True when nothing matched
    """
    query = build_issue_query(states, assignee, project)
    logger.info("Listing issues with %s", type(query).__name__, extra={"filter": query.filter})

    try:
        issues = paginated_request(query.fetcher(client), query.variables())
    except Exception:
        logger.debug("Fetching issues failed", exc_info=True, extra={"query": type(query).__name__})
        raise

    try:
        relations = resolve_relations(client, issues)
    except Exception:
        logger.debug("Resolving issue assignees and states failed", exc_info=True)
        raise

    summaries = [
        summarize(issue, issue_assignee, issue_state, title_width)
        for issue, (issue_assignee, issue_state) in zip(issues, relations)
    ]

    heading = f"Issues in project {project}" if project else f"Issues assigned to {assignee}"
    logger.info("Found %d issue(s)", len(summaries))
    return IssueListing(heading=heading, issues=sort_by_state(summaries))
