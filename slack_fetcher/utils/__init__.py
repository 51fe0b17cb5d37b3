"""Shared utilities for API client construction and logging."""

__all__ = [
    "api",
    "logging",
]
