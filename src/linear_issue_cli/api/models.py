"""Data model for the entities exchanged with the Linear API."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class StateType(str, Enum):
    """Workflow state categories.

    Declaration order is the listing sort order.
    """

    CANCELED = "canceled"
    COMPLETED = "completed"
    STARTED = "started"
    UNSTARTED = "unstarted"
    BACKLOG = "backlog"
    TRIAGE = "triage"


class LinearModel(BaseModel):
    """Base model accepting the camelCase field names used by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class User(LinearModel):
    """A workspace member."""

    id: str
    name: str = ""
    display_name: str = Field("", alias="displayName")


class State(LinearModel):
    """A workflow state."""

    id: str
    name: str
    type: str

    @property
    def state_type(self) -> StateType | None:
        """Enum value of ``type``, or None for types this client does not know."""
        try:
            return StateType(self.type)
        except ValueError:
            return None


class Team(LinearModel):
    """A team the viewer belongs to."""

    id: str
    key: str = ""
    name: str
    default_state_id: str | None = Field(None, alias="defaultIssueStateId")


class Project(LinearModel):
    """A project accessible from one or more teams."""

    id: str
    name: str


class Issue(LinearModel):
    """An issue snapshot; related entities are referenced by id."""

    id: str
    identifier: str
    title: str
    description: str | None = None
    url: str | None = None
    assignee_id: str | None = Field(None, alias="assigneeId")
    state_id: str | None = Field(None, alias="stateId")
    project_id: str | None = Field(None, alias="projectId")


class PageInfo(LinearModel):
    """Continuation info attached to each page."""

    has_next_page: bool = Field(False, alias="hasNextPage")
    end_cursor: str | None = Field(None, alias="endCursor")


class Page(BaseModel, Generic[T]):
    """One batch of entities plus its continuation info."""

    nodes: list[T] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo)


class IssueCreateInput(LinearModel):
    """Payload of the ``issueCreate`` mutation."""

    title: str
    team_id: str = Field(alias="teamId")
    state_id: str | None = Field(None, alias="stateId")
    project_id: str | None = Field(None, alias="projectId")
    description: str | None = None
    label_ids: list[str] = Field(default_factory=list, alias="labelIds")

    def to_variables(self) -> dict:
        """Serialize for the API, leaving out unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class IssueSummary(BaseModel):
    """One row of an issue listing."""

    identifier: str
    title: str
    status: str | None = None
    assignee: str | None = None
    state_type: str | None = Field(None, exclude=True)


class IssueListing(BaseModel):
    """Result of the listing flow."""

    heading: str
    issues: list[IssueSummary] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the query matched no issues."""
        return not self.issues


class CreatedIssue(BaseModel):
    """Result of the creation flow."""

    issue: Issue
    team: Team
    project: Project | None = None
