"""Tests for the GraphQL client."""

from unittest.mock import MagicMock

import pytest
import requests
import requests.adapters

from linear_issue_cli.api.client import POOL_MAXSIZE, LinearClient
from linear_issue_cli.api.models import Issue, IssueCreateInput, Team
from linear_issue_cli.errors import ApiRequestError, GraphQLError


def response(payload, status_code=200):
    mock = MagicMock()
    mock.status_code = status_code
    mock.json.return_value = payload
    if status_code >= 400:
        mock.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error", response=mock)
    return mock


@pytest.fixture
def session():
    mock = MagicMock(spec=requests.Session)
    mock.headers = {}
    return mock


@pytest.fixture
def client(session):
    return LinearClient("lin_api_test", session=session, page_size=25)


ISSUE_NODE = {
    "id": "i1",
    "identifier": "ENG-1",
    "title": "Crash",
    "description": None,
    "url": "https://linear.app/acme/issue/ENG-1",
    "assignee": {"id": "u1"},
    "state": {"id": "s1"},
    "project": None,
}


def test_authorization_header_is_set(client, session):
    assert session.headers["Authorization"] == "lin_api_test"


def test_issues_page_is_parsed(client, session):
    session.post.return_value = response(
        {"data": {"issues": {"nodes": [ISSUE_NODE], "pageInfo": {"hasNextPage": True, "endCursor": "cur"}}}}
    )

    page = client.issues({"filter": {"x": 1}, "after": "prev"})

    assert page.nodes[0].identifier == "ENG-1"
    assert page.nodes[0].assignee_id == "u1"
    assert page.nodes[0].project_id is None
    assert page.page_info.has_next_page is True
    assert page.page_info.end_cursor == "cur"
    sent = session.post.call_args.kwargs["json"]["variables"]
    assert sent == {"first": 25, "filter": {"x": 1}, "after": "prev"}


def test_viewer_teams_carry_default_state(client, session):
    session.post.return_value = response(
        {
            "data": {
                "viewer": {
                    "teams": {
                        "nodes": [{"id": "t1", "key": "ENG", "name": "Eng", "defaultIssueState": {"id": "s-todo"}}],
                        "pageInfo": {"hasNextPage": False, "endCursor": None},
                    }
                }
            }
        }
    )

    page = client.viewer_teams({})

    assert page.nodes == [Team(id="t1", key="ENG", name="Eng", default_state_id="s-todo")]


def test_graphql_errors_raise(client, session):
    session.post.return_value = response({"errors": [{"message": "Invalid filter"}], "data": None})

    with pytest.raises(GraphQLError, match="issues: Invalid filter") as exc_info:
        client.issues({})

    assert exc_info.value.operation == "issues"


def test_http_errors_raise(client, session):
    session.post.return_value = response({}, status_code=401)

    with pytest.raises(ApiRequestError) as exc_info:
        client.viewer()

    assert exc_info.value.status_code == 401
    assert exc_info.value.operation == "viewer"


def test_network_errors_raise(client, session):
    session.post.side_effect = requests.ConnectionError("no route to host")

    with pytest.raises(ApiRequestError, match="viewer.teams"):
        client.viewer_teams({})


def test_unassigned_issue_needs_no_request(client, session):
    assert client.issue_assignee(Issue(id="i", identifier="ENG-2", title="t")) is None
    session.post.assert_not_called()


def test_issue_state_lookup(client, session):
    session.post.return_value = response({"data": {"workflowState": {"id": "s1", "name": "Todo", "type": "unstarted"}}})

    state = client.issue_state(Issue(id="i", identifier="ENG-2", title="t", state_id="s1"))

    assert state.name == "Todo"
    assert session.post.call_args.kwargs["json"]["variables"] == {"id": "s1"}


def test_create_issue_omits_unset_fields(client, session):
    session.post.return_value = response({"data": {"issueCreate": {"success": True, "issue": ISSUE_NODE}}})

    issue = client.create_issue(IssueCreateInput(title="Crash", team_id="t1", state_id="s1"))

    assert issue.url == "https://linear.app/acme/issue/ENG-1"
    sent = session.post.call_args.kwargs["json"]["variables"]["input"]
    assert sent == {"title": "Crash", "teamId": "t1", "stateId": "s1", "labelIds": []}


def test_create_issue_unsuccessful(client, session):
    session.post.return_value = response({"data": {"issueCreate": {"success": False, "issue": None}}})

    with pytest.raises(GraphQLError, match="issueCreate"):
        client.create_issue(IssueCreateInput(title="Crash", team_id="t1"))


def test_default_session_pool_fits_concurrent_lookups():
    client = LinearClient("lin_api_test")

    adapter = client.session.get_adapter("https://api.linear.app/graphql")

    assert isinstance(adapter, requests.adapters.HTTPAdapter)
    assert adapter._pool_maxsize == POOL_MAXSIZE
    assert POOL_MAXSIZE >= 2 * client.page_size
