"""
Cloud Storage bucket sink
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from googleapiclient.errors import HttpError

from slack_fetcher.constants import DEFAULT_BUCKET_DESTINATION
from slack_fetcher.exceptions import SinkError
from slack_fetcher.services.sinks.file_sink import FileSink
from slack_fetcher.services.storage_adapter import StorageAdapter
from slack_fetcher.utils.logging import log_with_context


class BucketSink(FileSink):
    """Writes the snapshot to a temp file, then uploads it to a bucket.

    The object is always written under the same destination key, replacing
    the previous run's upload.
    """

    name = "bucket"

    def __init__(
        self,
        storage: StorageAdapter,
        bucket: str,
        destination: str = DEFAULT_BUCKET_DESTINATION,
        local_dir: str | Path | None = None,
        dry_run: bool = False,
    ) -> None:
        local_dir = Path(local_dir) if local_dir else Path(tempfile.gettempdir())
        super().__init__(local_dir / Path(destination).name, dry_run=False)
        self.storage = storage
        self.bucket = bucket
        self.destination = destination
        self.upload_dry_run = dry_run

    def finalize(self) -> None:
        local_path = self.write_file()
        try:
            self.storage.upload_file(self.bucket, self.destination, str(local_path))
        except HttpError as e:
            raise SinkError(
                f"Failed to upload {local_path} to gs://{self.bucket}/{self.destination}: {e}"
            ) from e

        if not self.upload_dry_run:
            log_with_context(
                logging.INFO,
                f"Messages have been written to gs://{self.bucket}/{self.destination}",
            )
