"""GraphQL client for the Linear API."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter

from linear_issue_cli.errors import ApiRequestError, GraphQLError

from .models import Issue, IssueCreateInput, Page, PageInfo, Project, State, Team, User

logger = logging.getLogger(__name__)

LINEAR_API_URL = "https://api.linear.app/graphql"
PAGE_SIZE = 50
# Listing looks up assignee and state of every issue at once
POOL_MAXSIZE = 2 * PAGE_SIZE

_PAGE_INFO = "pageInfo { hasNextPage endCursor }"
_ISSUE_FIELDS = "id identifier title description url assignee { id } state { id } project { id }"
_TEAM_FIELDS = "id key name defaultIssueState { id }"

ISSUES_QUERY = f"""
query Issues($filter: IssueFilter, $first: Int, $after: String) {{
  issues(filter: $filter, first: $first, after: $after) {{
    nodes {{ {_ISSUE_FIELDS} }}
    {_PAGE_INFO}
  }}
}}
"""

ASSIGNED_ISSUES_QUERY = f"""
query AssignedIssues($filter: IssueFilter, $first: Int, $after: String) {{
  viewer {{
    assignedIssues(filter: $filter, first: $first, after: $after) {{
      nodes {{ {_ISSUE_FIELDS} }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

VIEWER_QUERY = "query Viewer { viewer { id name displayName } }"

VIEWER_TEAMS_QUERY = f"""
query ViewerTeams($filter: TeamFilter, $first: Int, $after: String) {{
  viewer {{
    teams(filter: $filter, first: $first, after: $after) {{
      nodes {{ {_TEAM_FIELDS} }}
      {_PAGE_INFO}
    }}
  }}
}}
"""

PROJECTS_QUERY = f"""
query Projects($filter: ProjectFilter, $first: Int, $after: String) {{
  projects(filter: $filter, first: $first, after: $after) {{
    nodes {{ id name }}
    {_PAGE_INFO}
  }}
}}
"""

USER_QUERY = "query User($id: String!) { user(id: $id) { id name displayName } }"

STATE_QUERY = "query WorkflowState($id: String!) { workflowState(id: $id) { id name type } }"

TEAM_DEFAULT_STATE_QUERY = """
query TeamDefaultState($id: String!) {
  team(id: $id) { defaultIssueState { id name type } }
}
"""

CREATE_ISSUE_MUTATION = f"""
mutation IssueCreate($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{ {_ISSUE_FIELDS} }}
  }}
}}
"""


class IssueTrackerClient(Protocol):
    """Operations the flows need from the remote API."""

    def viewer(self) -> User: ...

    def issues(self, variables: dict[str, Any]) -> Page[Issue]: ...

    def viewer_assigned_issues(self, variables: dict[str, Any]) -> Page[Issue]: ...

    def viewer_teams(self, variables: dict[str, Any]) -> Page[Team]: ...

    def projects(self, variables: dict[str, Any]) -> Page[Project]: ...

    def issue_assignee(self, issue: Issue) -> User | None: ...

    def issue_state(self, issue: Issue) -> State | None: ...

    def team_default_state(self, team: Team) -> State | None: ...

    def create_issue(self, issue_input: IssueCreateInput) -> Issue: ...


def _ref_id(node: dict[str, Any], key: str) -> str | None:
    ref = node.get(key)
    return ref["id"] if ref else None


def parse_issue(node: dict[str, Any]) -> Issue:
    """Build an Issue from a GraphQL node with nested relation ids."""
    return Issue(
        id=node["id"],
        identifier=node["identifier"],
        title=node["title"],
        description=node.get("description"),
        url=node.get("url"),
        assignee_id=_ref_id(node, "assignee"),
        state_id=_ref_id(node, "state"),
        project_id=_ref_id(node, "project"),
    )


def parse_team(node: dict[str, Any]) -> Team:
    """Build a Team from a GraphQL node."""
    return Team(
        id=node["id"],
        key=node.get("key") or "",
        name=node["name"],
        default_state_id=_ref_id(node, "defaultIssueState"),
    )


class LinearClient:
    """Thin synchronous client for the Linear GraphQL endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = LINEAR_API_URL,
        timeout: float = 30,
        page_size: int = PAGE_SIZE,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.page_size = page_size
        self.session = session or self._create_session()
        self.session.headers.update({"Authorization": api_key, "Content-Type": "application/json"})

    @staticmethod
    def _create_session() -> requests.Session:
        """Session whose connection pool is large enough for concurrent lookups."""
        session = requests.Session()
        adapter = HTTPAdapter(pool_maxsize=POOL_MAXSIZE)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def graphql(self, query: str, variables: dict[str, Any] | None = None, operation: str | None = None) -> dict:
        """
        Execute a GraphQL document and return its ``data`` member.

        Args:
            query: GraphQL document
            variables: Query variables
            operation: Name used in logs and error messages

        Returns:
            The ``data`` object of the response

        Raises:
            ApiRequestError: On network failures and HTTP error statuses
            GraphQLError: When the response carries GraphQL errors
        """
        logger.debug("GraphQL request %s", operation, extra={"operation": operation, "variables": variables})
        try:
            response = self.session.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise ApiRequestError(f"HTTP error {status_code}: {e}", operation, status_code) from e
        except requests.RequestException as e:
            raise ApiRequestError(f"Request failed: {e}", operation) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiRequestError(f"Invalid JSON response: {e}", operation, response.status_code) from e

        if payload.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in payload["errors"])
            raise GraphQLError(messages, operation, payload["errors"])

        return payload.get("data") or {}

    def _page_variables(self, variables: dict[str, Any]) -> dict[str, Any]:
        return {"first": self.page_size, **variables}

    @staticmethod
    def _page(connection: dict[str, Any], parse: Any) -> Page:
        return Page(
            nodes=[parse(node) for node in connection.get("nodes", [])],
            page_info=PageInfo(**connection.get("pageInfo", {})),
        )

    def viewer(self) -> User:
        """Return the authenticated user."""
        data = self.graphql(VIEWER_QUERY, operation="viewer")
        return User(**data["viewer"])

    def issues(self, variables: dict[str, Any]) -> Page[Issue]:
        """Fetch one page of the generic issue query."""
        data = self.graphql(ISSUES_QUERY, self._page_variables(variables), operation="issues")
        return self._page(data["issues"], parse_issue)

    def viewer_assigned_issues(self, variables: dict[str, Any]) -> Page[Issue]:
        """Fetch one page of the viewer's assigned issues."""
        data = self.graphql(ASSIGNED_ISSUES_QUERY, self._page_variables(variables), operation="viewer.assignedIssues")
        return self._page(data["viewer"]["assignedIssues"], parse_issue)

    def viewer_teams(self, variables: dict[str, Any]) -> Page[Team]:
        """Fetch one page of the viewer's teams."""
        data = self.graphql(VIEWER_TEAMS_QUERY, self._page_variables(variables), operation="viewer.teams")
        return self._page(data["viewer"]["teams"], parse_team)

    def projects(self, variables: dict[str, Any]) -> Page[Project]:
        """Fetch one page of projects."""
        data = self.graphql(PROJECTS_QUERY, self._page_variables(variables), operation="projects")
        return self._page(data["projects"], lambda node: Project(**node))

    def issue_assignee(self, issue: Issue) -> User | None:
        """Resolve the assignee of an issue, if any."""
        if not issue.assignee_id:
            return None
        data = self.graphql(USER_QUERY, {"id": issue.assignee_id}, operation="user")
        return User(**data["user"]) if data.get("user") else None

    def issue_state(self, issue: Issue) -> State | None:
        """Resolve the workflow state of an issue."""
        if not issue.state_id:
            return None
        data = self.graphql(STATE_QUERY, {"id": issue.state_id}, operation="workflowState")
        return State(**data["workflowState"]) if data.get("workflowState") else None

    def team_default_state(self, team: Team) -> State | None:
        """Resolve the state new issues of a team start in."""
        data = self.graphql(TEAM_DEFAULT_STATE_QUERY, {"id": team.id}, operation="team.defaultIssueState")
        state = (data.get("team") or {}).get("defaultIssueState")
        return State(**state) if state else None

    def create_issue(self, issue_input: IssueCreateInput) -> Issue:
        """Submit the ``issueCreate`` mutation and return the created issue."""
        data = self.graphql(CREATE_ISSUE_MUTATION, {"input": issue_input.to_variables()}, operation="issueCreate")
        result = data.get("issueCreate") or {}
        if not result.get("success") or not result.get("issue"):
            raise GraphQLError("Issue creation was not successful", "issueCreate")
        issue = parse_issue(result["issue"])
        logger.info("Created issue %s", issue.identifier, extra={"identifier": issue.identifier})
        return issue
