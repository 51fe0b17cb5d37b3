"""
Message history retrieval for a single Slack channel
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from slack_fetcher.constants import DEFAULT_PAGE_SIZE, MESSAGES_KEY
from slack_fetcher.services.pagination import collect_pages, iter_pages
from slack_fetcher.types import FetchResult, Message, NormalizedMessage
from slack_fetcher.utils.logging import log_with_context


def normalize_message(raw: Message) -> NormalizedMessage:
    """Project a raw Slack message onto ``user``, ``text``, ``ts`` and ``type``.

    Missing ``user`` and ``ts`` become None; missing or null ``text`` and
    ``type`` become empty strings.
    """
    return NormalizedMessage(
        user=raw.get("user"),
        text=raw.get("text") or "",
        ts=raw.get("ts"),
        type=raw.get("type") or "",
    )


class HistoryFetcher:
    """Fetches a channel's messages through ``conversations.history``.

    Messages come back in the order Slack serves them; nothing is re-sorted
    by timestamp.
    """

    def __init__(
        self,
        client: Any,
        page_size: int = DEFAULT_PAGE_SIZE,
        normalize: bool = False,
    ) -> None:
        self.client = client
        self.page_size = page_size
        self.normalize = normalize

    def _project(self, messages: list[Message]) -> list[Message]:
        if not self.normalize:
            return messages
        return [dict(normalize_message(m)) for m in messages]

    def iter_history(
        self, channel_id: str, channel_name: str | None = None
    ) -> Iterator[list[Message]]:
        """Yield the channel's messages one page at a time.

        Errors propagate; use this when a channel is too large to hold in
        memory at once.
        """
        for page in iter_pages(
            self.client.conversations_history,
            MESSAGES_KEY,
            page_size=self.page_size,
            method="conversations.history",
            log_channel=channel_name,
            channel=channel_id,
        ):
            yield self._project(page)

    def try_fetch_history(
        self, channel_id: str, channel_name: str | None = None
    ) -> FetchResult[Message]:
        """Fetch the full history of one channel, reporting failure explicitly."""
        result = collect_pages(
            self.client.conversations_history,
            MESSAGES_KEY,
            page_size=self.page_size,
            method="conversations.history",
            log_channel=channel_name,
            channel=channel_id,
        )
        if result.failed:
            return result
        return FetchResult(items=self._project(result.items))

    def fetch_history(
        self, channel_id: str, channel_name: str | None = None
    ) -> list[Message]:
        """Fetch the full history of one channel; log and return [] on any failure."""
        result = self.try_fetch_history(channel_id, channel_name)
        if result.failed:
            log_with_context(
                logging.ERROR,
                f"Error fetching messages from channel {channel_id}: {result.error}",
                channel=channel_name,
            )
            return []
        return result.items
