"""
Firestore document-store sink
"""

from __future__ import annotations

import logging

from googleapiclient.errors import HttpError

from slack_fetcher.constants import (
    FIRESTORE_MAX_BATCH_WRITES,
    FIRESTORE_MESSAGES_SUBCOLLECTION,
)
from slack_fetcher.exceptions import SinkError
from slack_fetcher.services.firestore_adapter import FirestoreAdapter, auto_id
from slack_fetcher.services.sinks.base import Sink
from slack_fetcher.types import Message
from slack_fetcher.utils.logging import log_with_context


class DocumentStoreSink(Sink):
    """Stores every message as its own Firestore document.

    Documents live at ``{collection}/{channel_name}/messages/{auto_id}``.
    Each channel is committed as soon as it is persisted, in batches of at
    most ``batch_size`` writes, so channels already committed stay written
    if a later channel fails.
    """

    name = "firestore"
    abort_on_fetch_error = True

    def __init__(
        self,
        firestore: FirestoreAdapter,
        collection: str,
        batch_size: int = FIRESTORE_MAX_BATCH_WRITES,
    ) -> None:
        if not 0 < batch_size <= FIRESTORE_MAX_BATCH_WRITES:
            raise ValueError(
                f"batch_size must be between 1 and {FIRESTORE_MAX_BATCH_WRITES}"
            )
        self.firestore = firestore
        self.collection = collection
        self.batch_size = batch_size
        self.commits = 0
        self.documents_written = 0

    def _message_path(self, channel_name: str) -> str:
        return self.firestore.document_path(
            self.collection,
            channel_name,
            FIRESTORE_MESSAGES_SUBCOLLECTION,
            auto_id(),
        )

    def persist(self, channel_name: str, messages: list[Message]) -> None:
        if not messages:
            log_with_context(
                logging.DEBUG, "No messages to store", channel=channel_name
            )
            return

        writes = [
            self.firestore.create_write(self._message_path(channel_name), message)
            for message in messages
        ]
        for start in range(0, len(writes), self.batch_size):
            batch = writes[start : start + self.batch_size]
            try:
                self.firestore.commit(batch)
            except HttpError as e:
                raise SinkError(
                    f"Failed to commit {len(batch)} messages for channel {channel_name}: {e}"
                ) from e
            self.commits += 1
            self.documents_written += len(batch)

        log_with_context(
            logging.INFO,
            f"Stored {len(writes)} messages under {self.collection}/{channel_name}/{FIRESTORE_MESSAGES_SUBCOLLECTION}",
            channel=channel_name,
        )
