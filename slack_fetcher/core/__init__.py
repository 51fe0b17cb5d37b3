"""Core fetch logic including configuration and orchestration."""

__all__ = [
    "config",
    "context",
    "fetcher",
]
