"""Cloud Functions entry point: deploy with ``--entry-point fetch_messages``."""

from slack_fetcher.http_handler import fetch_messages

__all__ = ["fetch_messages"]
