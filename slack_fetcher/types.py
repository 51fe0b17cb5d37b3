"""Shared type definitions for the Slack message fetcher.

Provides the channel and message shapes that flow from the Slack Web API
through the fetchers into a sink, plus the structured results returned at
the fetch and run boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypedDict, TypeVar

from slack_fetcher.exceptions import FetchError

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Slack Web API types
# ---------------------------------------------------------------------------

# Raw message records are passed through exactly as Slack returns them.
Message = Dict[str, Any]

# channel name -> messages in API order
WorkspaceSnapshot = Dict[str, List[Message]]


@dataclass(frozen=True)
class Channel:
    """A channel as listed by ``conversations.list``, narrowed to id and name."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Channel:
        # Direct and group messages (im, mpim) are listed without a name
        channel_id = data.get("id", "")
        return cls(id=channel_id, name=data.get("name") or channel_id)


class NormalizedMessage(TypedDict):
    """Four-field projection of a Slack message."""

    user: Optional[str]
    text: str
    ts: Optional[str]
    type: str


# ---------------------------------------------------------------------------
# Result types (structured returns at fetch and run boundaries)
# ---------------------------------------------------------------------------


@dataclass
class FetchResult(Generic[T]):
    """Outcome of fetching one paginated resource.

    Either ``items`` holds the full concatenation of every page, or ``error``
    describes why the fetch stopped. A failed fetch never carries partial
    items, so callers that only look at ``items`` see the same empty list
    for "nothing there" and "could not fetch".
    """

    items: list[T] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> list[T]:
        """Return the items, raising :class:`FetchError` if the fetch failed."""
        if self.error is not None:
            raise FetchError(self.error)
        return self.items


@dataclass
class RunSummary:
    """Aggregate counters for one fetch run."""

    channels_listed: int = 0
    channels_processed: list[str] = field(default_factory=list)
    channels_skipped: list[str] = field(default_factory=list)
    failed_channels: dict[str, str] = field(default_factory=dict)
    messages_fetched: int = 0

    @property
    def partial(self) -> bool:
        """True when at least one channel's history could not be fetched."""
        return bool(self.failed_channels)


@dataclass
class RunResult:
    """What a fetch run produced.

    ``aborted`` distinguishes a run that stopped on an error from a clean run
    over an empty workspace; both can carry an empty snapshot.
    """

    snapshot: WorkspaceSnapshot = field(default_factory=dict)
    summary: RunSummary = field(default_factory=RunSummary)
    aborted: bool = False
    error: str | None = None
