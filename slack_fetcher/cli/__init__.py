"""Command-line interface for the Slack message fetcher."""
