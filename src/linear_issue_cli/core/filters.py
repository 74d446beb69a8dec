"""Translation of user-facing filters into Linear issue queries."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from linear_issue_cli.api.client import IssueTrackerClient
from linear_issue_cli.api.models import Issue, StateType

from .pagination import PageFetcher

logger = logging.getLogger(__name__)

VIEWER = "@me"
TERMINAL_STATE_TYPES = (StateType.COMPLETED, StateType.CANCELED)


def state_filter(states: Iterable[StateType | str] = ()) -> dict[str, Any]:
    """Filter on state type; no states means everything except completed and canceled."""
    requested = [StateType(s).value for s in states]
    if not requested:
        return {"state": {"type": {"nin": [s.value for s in TERMINAL_STATE_TYPES]}}}
    return {"state": {"type": {"in": requested}}}


def assignee_filter(assignee: str) -> dict[str, Any]:
    """Case-insensitive substring match on the assignee's display name."""
    return {"assignee": {"displayName": {"containsIgnoreCase": assignee}}}


def project_filter(project: str) -> dict[str, Any]:
    """Case-insensitive substring match on the project name."""
    return {"project": {"name": {"containsIgnoreCase": project}}}


@dataclass(frozen=True)
class IssueQuery(ABC):
    """An issue filter together with the connection it is sent to."""

    filter: dict[str, Any] = field(default_factory=dict)

    def variables(self) -> dict[str, Any]:
        return {"filter": self.filter}

    @abstractmethod
    def fetcher(self, client: IssueTrackerClient) -> PageFetcher[Issue]:
        """Page-fetch callable for this query."""


@dataclass(frozen=True)
class ViewerAssignedIssues(IssueQuery):
    """Issues reached through the viewer's own assigned-issues relation."""

    def fetcher(self, client: IssueTrackerClient) -> PageFetcher[Issue]:
        return client.viewer_assigned_issues


@dataclass(frozen=True)
class IssueSearch(IssueQuery):
    """Issues reached through the workspace-wide issue query."""

    def fetcher(self, client: IssueTrackerClient) -> PageFetcher[Issue]:
        return client.issues


def build_issue_query(
    states: Iterable[StateType | str] = (),
    assignee: str = VIEWER,
    project: str | None = None,
) -> IssueQuery:
    """
    Build the query for an issue listing.

    ``@me`` without a project goes through the viewer's assigned-issues
    relation. That relation cannot be combined with a project filter, so with
    a project ``@me`` is matched against display names like any other name.

    Args:
        states: State types to include; empty means all but terminal types
        assignee: ``@me`` or a display name fragment
        project: Project name fragment

    Returns:
        Query variant carrying the filter expression
    """
    issue_filter = state_filter(states)

    if assignee == VIEWER and not project:
        logger.debug("Using viewer assigned-issues relation", extra={"filter": issue_filter})
        return ViewerAssignedIssues(issue_filter)

    issue_filter.update(assignee_filter(assignee))
    if project:
        issue_filter.update(project_filter(project))

    logger.debug("Using issue search", extra={"filter": issue_filter})
    return IssueSearch(issue_filter)
