"""Hand-off to an external text editor for long-form input."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess  # nosec B404 - launching the user's editor requires subprocess
import tempfile
from pathlib import Path

from linear_issue_cli.errors import EditorError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"
EDITOR_SENTINEL = "e"


def open_text_editor(initial_content: str = "", editor: str = DEFAULT_EDITOR) -> str:
    """
    Let the user edit text in an external editor and return the result.

    The content goes through a uniquely named temporary file, the editor runs
    in the foreground with the terminal inherited, and the file is removed
    once read back.

    Args:
        initial_content: Text the file starts with
        editor: Editor command line, e.g. ``"code --wait"``

    Returns:
        File contents after the editor exits, stripped of surrounding whitespace

    Raises:
        EditorError: If the editor cannot be started or exits non-zero
    """
    fd, tmp_name = tempfile.mkstemp(prefix="issue-description-", suffix=".md")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(initial_content)

        command = [*shlex.split(editor), str(tmp_path)]
        logger.debug("Launching editor: %s", command)
        try:
            completed = subprocess.run(command, check=False)  # nosec B603
        except OSError as e:
            raise EditorError(f"Could not start editor '{editor}': {e}", editor) from e

        if completed.returncode != 0:
            raise EditorError(
                f"Editor '{editor}' exited with status {completed.returncode}",
                editor,
                completed.returncode,
            )

        return tmp_path.read_text(encoding="utf-8").strip()
    finally:
        tmp_path.unlink(missing_ok=True)


class TextEditor:
    """Editor command plus the prompt answer that launches it."""

    def __init__(self, command: str = DEFAULT_EDITOR, sentinel: str = EDITOR_SENTINEL):
        self.command = command
        self.sentinel = sentinel

    def edit(self, initial_content: str = "") -> str:
        """Open the editor on ``initial_content`` and return the edited text."""
        return open_text_editor(initial_content, self.command)
