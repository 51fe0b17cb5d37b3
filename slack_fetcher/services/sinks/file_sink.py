"""
Local JSON file sink
"""

from __future__ import annotations

import logging
from pathlib import Path

from slack_fetcher.constants import DEFAULT_OUTPUT_FILENAME
from slack_fetcher.exceptions import SinkError
from slack_fetcher.services.sinks.base import AccumulatingSink
from slack_fetcher.utils.logging import log_with_context


class FileSink(AccumulatingSink):
    """Writes the whole workspace snapshot to one JSON file."""

    name = "file"

    def __init__(
        self, output_path: str | Path = DEFAULT_OUTPUT_FILENAME, dry_run: bool = False
    ) -> None:
        super().__init__()
        self.output_path = Path(output_path)
        self.dry_run = dry_run

    def write_file(self) -> Path:
        """Serialise the snapshot to ``output_path``, creating parent directories."""
        content = self.serialize()
        if self.dry_run:
            log_with_context(
                logging.INFO,
                f"[DRY RUN] Would write {len(content.encode('utf-8'))} bytes to {self.output_path}",
            )
            return self.output_path

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SinkError(f"Failed to write {self.output_path}: {e}") from e
        return self.output_path

    def finalize(self) -> None:
        path = self.write_file()
        if not self.dry_run:
            log_with_context(logging.INFO, f"Messages have been written to {path}")
