"""
Sinks that persist a fetched workspace snapshot.
"""

from __future__ import annotations

from typing import Any

from slack_fetcher.constants import (
    FIRESTORE_SCOPES,
    SINK_BUCKET,
    SINK_FILE,
    SINK_FIRESTORE,
    STORAGE_SCOPES,
)
from slack_fetcher.core.context import FetchContext
from slack_fetcher.services.dry_run_service import (
    DryRunFirestoreService,
    DryRunStorageService,
)
from slack_fetcher.services.firestore_adapter import FirestoreAdapter
from slack_fetcher.services.sinks.base import AccumulatingSink, Sink
from slack_fetcher.services.sinks.bucket_sink import BucketSink
from slack_fetcher.services.sinks.file_sink import FileSink
from slack_fetcher.services.sinks.firestore_sink import DocumentStoreSink
from slack_fetcher.services.storage_adapter import StorageAdapter
from slack_fetcher.utils.api import get_gcp_service

__all__ = [
    "AccumulatingSink",
    "BucketSink",
    "DocumentStoreSink",
    "FileSink",
    "Sink",
    "create_sink",
]


def _google_service(
    context: FetchContext, api: str, version: str, scopes: list[str]
) -> Any:
    return get_gcp_service(context.creds_path or "", api, version, scopes)


def create_sink(context: FetchContext) -> Sink:
    """Build the sink selected by ``context.config.sink``.

    In dry-run mode the cloud sinks get no-op Google services that log what
    they would have written.
    """
    config = context.config

    if config.sink == SINK_FILE:
        return FileSink(config.output_file, dry_run=context.dry_run)

    if config.sink == SINK_BUCKET:
        service = (
            DryRunStorageService()
            if context.dry_run
            else _google_service(context, "storage", "v1", STORAGE_SCOPES)
        )
        return BucketSink(
            StorageAdapter(service),
            bucket=config.bucket.name,
            destination=config.bucket.destination,
            dry_run=context.dry_run,
        )

    if config.sink == SINK_FIRESTORE:
        service = (
            DryRunFirestoreService()
            if context.dry_run
            else _google_service(context, "firestore", "v1", FIRESTORE_SCOPES)
        )
        adapter = FirestoreAdapter(
            service,
            context.project_id or "dry-run-project",
            database=config.firestore.database,
        )
        return DocumentStoreSink(adapter, collection=config.firestore.collection)

    raise ValueError(f"Unknown sink: {config.sink}")
