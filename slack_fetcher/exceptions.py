"""Custom exception hierarchy for the Slack message fetcher."""


class FetcherError(Exception):
    """Base exception for all fetcher errors."""


class ConfigError(FetcherError):
    """Raised when configuration or required environment values are missing or invalid."""


class FetchError(FetcherError):
    """Raised when a paginated Slack resource could not be fetched."""


class SinkError(FetcherError):
    """Raised when a sink fails to persist the fetched messages."""
