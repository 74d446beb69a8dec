"""Shared fixtures: an in-memory API client and scripted prompts."""

from __future__ import annotations

from typing import Any

import pytest

from linear_issue_cli.api.models import Issue, IssueCreateInput, Page, PageInfo, Project, State, Team, User


def make_pages(nodes_per_page: list[list[Any]]) -> list[Page]:
    """Chain pages so that page i points at cursor ``c<i>``."""
    pages = []
    for index, nodes in enumerate(nodes_per_page):
        is_last = index == len(nodes_per_page) - 1
        pages.append(
            Page(
                nodes=nodes,
                page_info=PageInfo(has_next_page=not is_last, end_cursor=None if is_last else f"c{index}"),
            )
        )
    return pages


class FakeClient:
    """In-memory stand-in for LinearClient that records every call."""

    def __init__(
        self,
        issues: list[Issue] | None = None,
        users: dict[str, User] | None = None,
        states: dict[str, State] | None = None,
        teams: list[Team] | None = None,
        projects: list[Project] | None = None,
        teams_error: Exception | None = None,
        projects_error: Exception | None = None,
    ):
        self._issues = issues or []
        self._users = users or {}
        self._states = states or {}
        self._teams = teams or []
        self._projects = projects or []
        self._teams_error = teams_error
        self._projects_error = projects_error
        self.calls: dict[str, list[Any]] = {
            "issues": [],
            "viewer_assigned_issues": [],
            "viewer_teams": [],
            "projects": [],
            "create_issue": [],
            "team_default_state": [],
        }

    def viewer(self) -> User:
        return User(id="me", name="Me", display_name="me")

    def issues(self, variables: dict[str, Any]) -> Page[Issue]:
        self.calls["issues"].append(variables)
        return Page(nodes=list(self._issues))

    def viewer_assigned_issues(self, variables: dict[str, Any]) -> Page[Issue]:
        self.calls["viewer_assigned_issues"].append(variables)
        return Page(nodes=list(self._issues))

    def viewer_teams(self, variables: dict[str, Any]) -> Page[Team]:
        self.calls["viewer_teams"].append(variables)
        if self._teams_error is not None:
            raise self._teams_error
        return Page(nodes=list(self._teams))

    def projects(self, variables: dict[str, Any]) -> Page[Project]:
        self.calls["projects"].append(variables)
        if self._projects_error is not None:
            raise self._projects_error
        return Page(nodes=list(self._projects))

    def issue_assignee(self, issue: Issue) -> User | None:
        return self._users.get(issue.assignee_id) if issue.assignee_id else None

    def issue_state(self, issue: Issue) -> State | None:
        return self._states.get(issue.state_id) if issue.state_id else None

    def team_default_state(self, team: Team) -> State | None:
        self.calls["team_default_state"].append(team.id)
        return State(id=f"{team.id}-default", name="Todo", type="unstarted")

    def create_issue(self, issue_input: IssueCreateInput) -> Issue:
        self.calls["create_issue"].append(issue_input)
        return Issue(
            id="new-issue",
            identifier="ENG-42",
            title=issue_input.title,
            description=issue_input.description,
            url="https://linear.app/acme/issue/ENG-42",
        )


class ScriptedPrompter:
    """Prompter answering from queues and recording the questions asked."""

    def __init__(self, texts: list[str] | None = None, choices: list[str] | None = None):
        self.texts = list(texts or [])
        self.choices = list(choices or [])
        self.asked: list[str] = []
        self.offered: dict[str, list[tuple[str, str]]] = {}

    def text(self, message: str) -> str:
        self.asked.append(message)
        return self.texts.pop(0)

    def choose(self, message: str, choices: list[tuple[str, str]]) -> str:
        self.asked.append(message)
        self.offered[message] = list(choices)
        return self.choices.pop(0)


class RecordingEditor:
    """TextEditor replacement returning canned text."""

    def __init__(self, result: str = "", command: str = "fake-editor", sentinel: str = "e"):
        self.result = result
        self.command = command
        self.sentinel = sentinel
        self.calls: list[str] = []

    def edit(self, initial_content: str = "") -> str:
        self.calls.append(initial_content)
        return self.result


@pytest.fixture
def states() -> dict[str, State]:
    return {
        "s-triage": State(id="s-triage", name="Triage", type="triage"),
        "s-backlog": State(id="s-backlog", name="Backlog", type="backlog"),
        "s-todo": State(id="s-todo", name="Todo", type="unstarted"),
        "s-doing": State(id="s-doing", name="In Progress", type="started"),
        "s-done": State(id="s-done", name="Done", type="completed"),
        "s-canceled": State(id="s-canceled", name="Canceled", type="canceled"),
    }


@pytest.fixture
def users() -> dict[str, User]:
    return {
        "u-alice": User(id="u-alice", name="Alice Smith", display_name="alice"),
        "u-bob": User(id="u-bob", name="Bob Jones", display_name="bob"),
    }
