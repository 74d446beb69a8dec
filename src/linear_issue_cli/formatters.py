"""Output formatters for issue listings."""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.markup import escape
from rich.table import Table

from . import __version__
from .api.models import IssueListing

logger = logging.getLogger(__name__)

COLUMNS = ("identifier", "title", "status", "assignee")


class BaseFormatter:
    """Base class for output formatters."""

    def format(self, listing: IssueListing, **_kwargs: Any) -> str:
        """Format an issue listing."""
        raise NotImplementedError


class JSONFormatter(BaseFormatter):
    """JSON output formatter."""

    def format(self, listing: IssueListing, **_kwargs: Any) -> str:
        """Format the listing as JSON."""
        logger.debug("Formatting %d issues as JSON", len(listing.issues))

        output = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tool": {"name": "linear-issue-cli", "version": __version__},
            "heading": listing.heading,
            "total": len(listing.issues),
            "issues": [summary.model_dump() for summary in listing.issues],
        }

        return json.dumps(output, indent=2, ensure_ascii=False)


class CSVFormatter(BaseFormatter):
    """CSV output formatter."""

    def format(self, listing: IssueListing, **_kwargs: Any) -> str:
        """Format the listing as CSV with a header row."""
        logger.debug("Formatting %d issues as CSV", len(listing.issues))

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=COLUMNS, lineterminator="\n")
        writer.writeheader()
        for summary in listing.issues:
            writer.writerow(summary.model_dump())
        return buffer.getvalue()


def build_table(listing: IssueListing) -> Table:
    """Render the listing as a rich table; the state sort key is not shown."""
    table = Table(title=listing.heading)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Status", style="yellow", no_wrap=True)
    table.add_column("Assignee", style="green", no_wrap=True)

    for summary in listing.issues:
        table.add_row(
            escape(f"[{summary.identifier}]"),
            escape(summary.title),
            escape(summary.status or ""),
            escape(summary.assignee or ""),
        )

    return table


class FormatterRegistry:
    """Registry for output formatters."""

    def __init__(self) -> None:
        self._formatters: dict[str, BaseFormatter] = {"json": JSONFormatter(), "csv": CSVFormatter()}

    def get_formatter(self, format_name: str) -> BaseFormatter | None:
        """Get formatter by name."""
        return self._formatters.get(format_name.lower())

    def list_formats(self) -> list[str]:
        """List available formats."""
        return list(self._formatters.keys())

    def register_formatter(self, name: str, formatter: BaseFormatter) -> None:
        """Register a custom formatter."""
        self._formatters[name.lower()] = formatter


# Global formatter registry
formatter_registry = FormatterRegistry()
