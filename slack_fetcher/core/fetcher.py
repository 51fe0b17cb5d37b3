"""
Main fetcher class for the Slack message fetcher
"""

from __future__ import annotations

import logging
from typing import Any

from tqdm import tqdm

from slack_fetcher.core.config import should_process_channel
from slack_fetcher.core.context import FetchContext
from slack_fetcher.exceptions import FetchError
from slack_fetcher.services.channels import ChannelEnumerator
from slack_fetcher.services.history import HistoryFetcher
from slack_fetcher.services.sinks import Sink, create_sink
from slack_fetcher.types import Channel, RunResult, RunSummary
from slack_fetcher.utils.api import get_slack_client
from slack_fetcher.utils.logging import log_with_context


class SlackMessageFetcher:
    """Fetches every channel's history and hands it to a sink.

    The run is strictly sequential: channels are listed once, then each
    channel's history is fetched and persisted before the next one starts.
    """

    def __init__(
        self,
        context: FetchContext,
        client: Any = None,
        sink: Sink | None = None,
    ) -> None:
        self.context = context
        self.config = context.config
        self.client = client or get_slack_client(
            context.slack_token, rate_limit_retries=self.config.rate_limit_retries
        )
        self.sink = sink or create_sink(context)
        self.channels = ChannelEnumerator(
            self.client,
            page_size=self.config.page_size,
            channel_types=self.config.channel_types,
            exclude_archived=self.config.exclude_archived,
        )
        self.history = HistoryFetcher(
            self.client,
            page_size=self.config.page_size,
            normalize=self.config.normalize_messages,
        )
        self.summary = RunSummary()

    @property
    def abort_on_error(self) -> bool:
        """Whether a failed history fetch ends the run.

        The config value wins when set; otherwise the sink decides.
        """
        if self.config.abort_on_error is not None:
            return self.config.abort_on_error
        return self.sink.abort_on_fetch_error

    def _fetch_channel(self, channel: Channel) -> list[dict[str, Any]]:
        result = self.history.try_fetch_history(channel.id, channel.name)
        if result.ok:
            return result.items

        self.summary.failed_channels[channel.name] = result.error or ""
        if self.abort_on_error:
            raise FetchError(
                f"Error fetching messages from channel {channel.name} ({channel.id}): {result.error}"
            )
        log_with_context(
            logging.ERROR,
            f"Error fetching messages from channel {channel.id}: {result.error}",
            channel=channel.name,
        )
        return []

    def process_channels(self, channels: list[Channel]) -> None:
        """Fetch and persist each channel in order."""
        prefix = self.context.log_prefix
        for channel in tqdm(
            channels,
            desc="Fetching channels",
            unit="channel",
            disable=not self.config.show_progress,
        ):
            if not should_process_channel(channel.name, self.config):
                self.summary.channels_skipped.append(channel.name)
                continue

            log_with_context(
                logging.INFO,
                f"{prefix}Fetching messages from channel: {channel.name} ({channel.id})",
                channel=channel.name,
            )
            messages = self._fetch_channel(channel)
            self.sink.persist(channel.name, messages)

            self.summary.channels_processed.append(channel.name)
            self.summary.messages_fetched += len(messages)
            log_with_context(
                logging.INFO,
                f"{prefix}Fetched {len(messages)} messages from channel: {channel.name}",
                channel=channel.name,
            )

    def run(self) -> RunResult:
        """
        Run the whole fetch: list channels, fetch each history, persist.

        Errors from a sink, or a history failure when ``abort_on_error``
        applies, are caught here once. The run then stops and the result is
        marked aborted, carrying whatever had been accumulated.

        Returns:
            RunResult with the snapshot, counters, and abort status
        """
        self.summary = RunSummary()
        try:
            channels = self.channels.list_channels()
            self.summary.channels_listed = len(channels)
            self.process_channels(channels)
            self.sink.finalize()
        except Exception as e:
            log_with_context(
                logging.ERROR,
                f"Error fetching messages from multiple channels: {e}",
                exc_info=self.context.verbose,
            )
            return RunResult(
                snapshot=self.sink.snapshot,
                summary=self.summary,
                aborted=True,
                error=str(e),
            )

        if self.summary.channels_processed:
            log_with_context(
                logging.INFO,
                f"Fetched {self.summary.messages_fetched} messages from "
                f"{len(self.summary.channels_processed)} channels",
            )
        else:
            log_with_context(logging.INFO, "No messages retrieved.")
        if self.summary.partial:
            log_with_context(
                logging.WARNING,
                f"History could not be fetched for {len(self.summary.failed_channels)} "
                f"channel(s): {', '.join(self.summary.failed_channels)}",
            )

        return RunResult(snapshot=self.sink.snapshot, summary=self.summary)
