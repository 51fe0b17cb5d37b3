"""Service integrations for the Slack Web API and the Google Cloud sinks."""

__all__ = [
    "channels",
    "dry_run_service",
    "firestore_adapter",
    "history",
    "pagination",
    "sinks",
    "storage_adapter",
]
