"""Interactive prompts used by the creation flow."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Protocol

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from .errors import PromptUnavailableError

logger = logging.getLogger(__name__)

# (label, value)
Choice = tuple[str, str]


class Prompter(Protocol):
    """Source of interactive answers."""

    def text(self, message: str) -> str: ...

    def choose(self, message: str, choices: Sequence[Choice]) -> str: ...


class RichPrompter:
    """Prompter reading from the terminal through rich."""

    def __init__(self, console: Console | None = None, interactive: bool | None = None):
        self.console = console or Console()
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def _require_terminal(self, message: str) -> None:
        if not self.interactive:
            raise PromptUnavailableError(f"'{message}' requires interactive input, but stdin is not a terminal")

    def text(self, message: str) -> str:
        """Ask for free text; an empty answer is returned as ``""``."""
        self._require_terminal(message)
        try:
            return Prompt.ask(message, console=self.console, default="", show_default=False)
        except EOFError as e:
            raise PromptUnavailableError(f"No input available for '{message}'") from e

    def choose(self, message: str, choices: Sequence[Choice]) -> str:
        """Show a numbered list and return the value of the picked entry."""
        self._require_terminal(message)
        if not choices:
            raise ValueError(f"No choices to pick from for '{message}'")

        for index, (label, _value) in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{index:>3}[/cyan]  {label}")

        try:
            picked = IntPrompt.ask(
                message,
                console=self.console,
                choices=[str(i) for i in range(1, len(choices) + 1)],
                show_choices=False,
            )
        except EOFError as e:
            raise PromptUnavailableError(f"No input available for '{message}'") from e

        label, value = choices[picked - 1]
        logger.debug("Picked %s for %s", label, message)
        return value
