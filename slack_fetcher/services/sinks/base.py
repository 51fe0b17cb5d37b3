"""
Common interface for the destinations a workspace snapshot is written to
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import ClassVar

from slack_fetcher.types import Message, WorkspaceSnapshot


class Sink(ABC):
    """Receives each channel's messages, in channel order, once per run."""

    # Whether a failed history fetch should end the run for this sink
    abort_on_fetch_error: ClassVar[bool] = False

    name: ClassVar[str] = "sink"

    @abstractmethod
    def persist(self, channel_name: str, messages: list[Message]) -> None:
        """Hand over one channel's full message list."""

    def finalize(self) -> None:
        """Called once after the last channel has been persisted."""

    @property
    def snapshot(self) -> WorkspaceSnapshot:
        """Messages accumulated so far, keyed by channel name."""
        return {}


class AccumulatingSink(Sink):
    """Sink that holds the whole snapshot in memory and writes it at the end."""

    def __init__(self) -> None:
        self._snapshot: WorkspaceSnapshot = {}

    def persist(self, channel_name: str, messages: list[Message]) -> None:
        # A repeated channel name replaces the earlier entry, keeping its position
        self._snapshot[channel_name] = list(messages)

    @property
    def snapshot(self) -> WorkspaceSnapshot:
        return self._snapshot

    def serialize(self) -> str:
        """Render the snapshot as the JSON document written to disk."""
        return json.dumps(self._snapshot, indent=2, ensure_ascii=False)
