"""
Channel enumeration for a Slack workspace
"""

from __future__ import annotations

import logging
from typing import Any

from slack_fetcher.constants import (
    CHANNELS_KEY,
    DEFAULT_CHANNEL_TYPES,
    DEFAULT_PAGE_SIZE,
)
from slack_fetcher.services.pagination import collect_pages
from slack_fetcher.types import Channel, FetchResult
from slack_fetcher.utils.logging import log_with_context


class ChannelEnumerator:
    """Lists every channel in the workspace through ``conversations.list``."""

    def __init__(
        self,
        client: Any,
        page_size: int = DEFAULT_PAGE_SIZE,
        channel_types: str = DEFAULT_CHANNEL_TYPES,
        exclude_archived: bool = False,
    ) -> None:
        self.client = client
        self.page_size = page_size
        self.channel_types = channel_types
        self.exclude_archived = exclude_archived

    def try_list_channels(self) -> FetchResult[Channel]:
        """
        Fetch all channels, reporting failure instead of hiding it.

        Channels keep the order the API serves them in. A channel id that
        appears on two pages is listed twice.

        Returns:
            FetchResult with one Channel per listed record, or the error
        """
        params: dict[str, Any] = {"types": self.channel_types}
        if self.exclude_archived:
            params["exclude_archived"] = True

        result = collect_pages(
            self.client.conversations_list,
            CHANNELS_KEY,
            page_size=self.page_size,
            method="conversations.list",
            **params,
        )
        if result.failed:
            return FetchResult(error=result.error)

        return FetchResult(items=[Channel.from_api(raw) for raw in result.items])

    def list_channels(self) -> list[Channel]:
        """Fetch all channels; on any failure log it and return an empty list."""
        result = self.try_list_channels()
        if result.failed:
            log_with_context(
                logging.ERROR, f"Error fetching channel list: {result.error}"
            )
            return []

        log_with_context(logging.INFO, f"Found {len(result.items)} channels")
        return result.items
