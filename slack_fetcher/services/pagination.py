"""
Cursor-based pagination over Slack Web API list methods.

Slack list methods (``conversations.list``, ``conversations.history``) return
one page of items plus ``response_metadata.next_cursor``. An empty or missing
cursor means the last page has been served.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from slack_fetcher.constants import DEFAULT_PAGE_SIZE
from slack_fetcher.types import FetchResult
from slack_fetcher.utils.logging import (
    log_api_request,
    log_api_response,
    log_with_context,
)


def next_cursor(response: Any) -> str | None:
    """Return the continuation cursor of a response, or None on the last page."""
    metadata = response.get("response_metadata") or {}
    return metadata.get("next_cursor") or None


def iter_pages(
    call: Callable[..., Any],
    items_key: str,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    method: str | None = None,
    log_channel: str | None = None,
    **params: Any,
) -> Iterator[list[Any]]:
    """
    Yield the items of each page, following the cursor until it runs out.

    The first request carries no cursor. Each later request carries the
    cursor of the page before it. Errors raised by ``call`` propagate to the
    caller, so a consumer that stops on an error has seen only the pages
    served before it.

    Args:
        call: Slack client method, e.g. ``client.conversations_list``
        items_key: Response key holding the page items (``channels``, ``messages``)
        page_size: Value passed as ``limit`` on every request
        method: API method name used in debug logs
        log_channel: Channel name for log context
        **params: Extra parameters sent with every request

    Yields:
        The list of items of each page, in the order served
    """
    method = method or getattr(call, "__name__", "api_call")
    cursor = None
    page_number = 0
    while True:
        request_params = {**params, "cursor": cursor, "limit": page_size}
        log_api_request(method, request_params, channel=log_channel)
        response = call(**request_params)
        page_number += 1

        items = response.get(items_key) or []
        cursor = next_cursor(response)
        log_api_response(
            method,
            {"page": page_number, "items": len(items), "next_cursor": cursor},
            channel=log_channel,
        )

        yield items

        if not cursor:
            break


def collect_pages(
    call: Callable[..., Any],
    items_key: str,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    method: str | None = None,
    log_channel: str | None = None,
    **params: Any,
) -> FetchResult[Any]:
    """
    Concatenate every page into a :class:`FetchResult`.

    Any exception while fetching a page turns into a failed result with no
    items; pages received before the failure are discarded.
    """
    items: list[Any] = []
    try:
        for page in iter_pages(
            call,
            items_key,
            page_size=page_size,
            method=method,
            log_channel=log_channel,
            **params,
        ):
            items.extend(page)
    except Exception as e:
        log_with_context(
            logging.DEBUG,
            f"Pagination of {method or items_key} stopped after {len(items)} items: {e}",
            channel=log_channel,
        )
        return FetchResult(items=[], error=str(e) or e.__class__.__name__)

    return FetchResult(items=items)
