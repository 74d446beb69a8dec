"""Cursor-based traversal of paged API results."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from linear_issue_cli.api.models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[dict[str, Any]], Page[T]]


def paginated_request(fetch_page: PageFetcher[T], variables: dict[str, Any]) -> list[T]:
    """
    Fetch every page of a connection and return all nodes in arrival order.

    The first request uses ``variables`` as given; each following request adds
    the server's ``endCursor`` as ``after``. Errors raised by ``fetch_page``
    propagate and nothing accumulated so far is returned.

    Args:
        fetch_page: Callable performing one page request
        variables: Initial query variables, typically ``{"filter": ...}``

    Returns:
        Concatenation of the nodes of every page
    """
    nodes: list[T] = []
    page = fetch_page(dict(variables))
    nodes.extend(page.nodes)
    requests_made = 1

    while page.page_info.has_next_page:
        page = fetch_page({**variables, "after": page.page_info.end_cursor})
        nodes.extend(page.nodes)
        requests_made += 1

    logger.debug("Fetched %d nodes in %d page(s)", len(nodes), requests_made)
    return nodes
