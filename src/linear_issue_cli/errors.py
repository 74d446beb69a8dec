"""Exception hierarchy shared by the API client, the flows and the CLI."""

from __future__ import annotations


class LinearCliError(Exception):
    """Base class for all errors raised by linear-issue-cli."""


class ApiError(LinearCliError):
    """A request to the remote API failed."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.operation:
            return f"{self.operation}: {message}"
        return message


class ApiRequestError(ApiError):
    """Transport-level failure: connection error, timeout or HTTP error status."""

    def __init__(self, message: str, operation: str | None = None, status_code: int | None = None):
        super().__init__(message, operation)
        self.status_code = status_code


class GraphQLError(ApiError):
    """The server answered but reported errors in the GraphQL payload."""

    def __init__(self, message: str, operation: str | None = None, errors: list[dict] | None = None):
        super().__init__(message, operation)
        self.errors = errors or []


class ValidationError(LinearCliError):
    """A precondition for the requested command does not hold."""


class PromptUnavailableError(ValidationError):
    """Interactive input is required but stdin is not a terminal."""


class NoTeamsError(ValidationError):
    """The viewer does not belong to any team, so no issue can be filed."""


class ConfigError(ValidationError):
    """Configuration is missing or cannot be parsed."""


class EditorError(LinearCliError):
    """The external text editor could not be run or exited with an error."""

    def __init__(self, message: str, command: str, returncode: int | None = None):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
