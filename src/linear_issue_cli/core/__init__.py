"""Listing and creation flows."""

from .creation import create_issue
from .editor import TextEditor, open_text_editor
from .filters import IssueQuery, IssueSearch, ViewerAssignedIssues, build_issue_query
from .listing import list_issues, truncate
from .pagination import paginated_request

__all__ = [
    "IssueQuery",
    "IssueSearch",
    "TextEditor",
    "ViewerAssignedIssues",
    "build_issue_query",
    "create_issue",
    "list_issues",
    "open_text_editor",
    "paginated_request",
    "truncate",
]
