"""Linear API client and data model."""

from .client import LinearClient, IssueTrackerClient
from .models import (
    CreatedIssue,
    Issue,
    IssueCreateInput,
    IssueListing,
    IssueSummary,
    Page,
    PageInfo,
    Project,
    State,
    StateType,
    Team,
    User,
)

__all__ = [
    "CreatedIssue",
    "Issue",
    "IssueCreateInput",
    "IssueListing",
    "IssueSummary",
    "IssueTrackerClient",
    "LinearClient",
    "Page",
    "PageInfo",
    "Project",
    "State",
    "StateType",
    "Team",
    "User",
]
