"""
Configuration module for the Slack message fetcher.

This module provides functions for loading configuration settings from YAML
files, creating a default configuration, and determining which Slack
channels should be fetched based on the configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from slack_fetcher.constants import (
    DEFAULT_BUCKET_DESTINATION,
    DEFAULT_CHANNEL_TYPES,
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_PAGE_SIZE,
    FIRESTORE_DEFAULT_DATABASE,
    SINK_FILE,
    VALID_SINKS,
)
from slack_fetcher.utils.logging import log_with_context


@dataclass
class BucketConfig:
    """Cloud Storage target for the bucket sink."""

    name: str = ""
    destination: str = DEFAULT_BUCKET_DESTINATION

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BucketConfig:
        if not data:
            return cls()
        return cls(
            name=data.get("name", ""),
            destination=data.get("destination", DEFAULT_BUCKET_DESTINATION),
        )


@dataclass
class FirestoreConfig:
    """Firestore target for the document-store sink."""

    collection: str = ""
    database: str = FIRESTORE_DEFAULT_DATABASE

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> FirestoreConfig:
        if not data:
            return cls()
        return cls(
            collection=data.get("collection", ""),
            database=data.get("database", FIRESTORE_DEFAULT_DATABASE),
        )


def _validate_sink(value: str) -> str:
    if value not in VALID_SINKS:
        raise ValueError(
            f"Invalid sink '{value}'. Must be one of: {', '.join(VALID_SINKS)}"
        )
    return value


@dataclass
class FetcherConfig:
    """Typed configuration for the fetcher."""

    # Output
    sink: str = SINK_FILE
    output_file: str = DEFAULT_OUTPUT_FILENAME
    bucket: BucketConfig = field(default_factory=BucketConfig)
    firestore: FirestoreConfig = field(default_factory=FirestoreConfig)

    # Slack API
    page_size: int = DEFAULT_PAGE_SIZE
    channel_types: str = DEFAULT_CHANNEL_TYPES
    exclude_archived: bool = False
    rate_limit_retries: int = 0

    # Channel filtering
    include_channels: list[str] = field(default_factory=list)
    exclude_channels: list[str] = field(default_factory=list)

    # Messages
    normalize_messages: bool = False

    # Error handling: None defers to the sink's own default
    abort_on_error: bool | None = None

    # Console
    show_progress: bool = False

    def __post_init__(self) -> None:
        _validate_sink(self.sink)
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FetcherConfig:
        """Create a FetcherConfig from a raw config dictionary."""
        channel_types = data.get("channel_types", DEFAULT_CHANNEL_TYPES)
        if isinstance(channel_types, list):
            channel_types = ",".join(channel_types)
        return cls(
            sink=data.get("sink", SINK_FILE),
            output_file=data.get("output_file", DEFAULT_OUTPUT_FILENAME),
            bucket=BucketConfig.from_dict(data.get("bucket")),
            firestore=FirestoreConfig.from_dict(data.get("firestore")),
            page_size=data.get("page_size", DEFAULT_PAGE_SIZE),
            channel_types=channel_types,
            exclude_archived=data.get("exclude_archived", False),
            rate_limit_retries=data.get("rate_limit_retries", 0),
            include_channels=data.get("include_channels") or [],
            exclude_channels=data.get("exclude_channels") or [],
            normalize_messages=data.get("normalize_messages", False),
            abort_on_error=data.get("abort_on_error"),
            show_progress=data.get("show_progress", False),
        )


def load_config(config_path: Path) -> FetcherConfig:
    """
    Load configuration from YAML file and apply default values.

    If the file doesn't exist or can't be parsed, a warning is logged and
    default settings are used. Values that parse but are invalid (an unknown
    sink, a non-positive page size) raise ``ValueError``.

    Args:
        config_path: Path to the config YAML file

    Returns:
        FetcherConfig with all necessary defaults applied
    """
    raw: dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)
                # Handle None result from empty file
                if loaded_config is not None:
                    raw = loaded_config
            log_with_context(logging.INFO, f"Loaded configuration from {config_path}")
        except (yaml.YAMLError, OSError) as e:
            log_with_context(
                logging.WARNING, f"Failed to load config file {config_path}: {e}"
            )
    else:
        log_with_context(
            logging.WARNING,
            f"Config file {config_path} not found, using default settings",
        )

    return FetcherConfig.from_dict(raw)


def create_default_config(output_path: Path) -> bool:
    """
    Create a default configuration file with recommended settings.

    The function will not overwrite an existing configuration file.

    Args:
        output_path: Path where the default config should be saved

    Returns:
        True if the config file was created successfully, False otherwise
    """
    if output_path.exists():
        log_with_context(
            logging.WARNING,
            f"Config file {output_path} already exists, not overwriting",
        )
        return False

    default_config = {
        # One of: file, bucket, firestore
        "sink": SINK_FILE,
        "output_file": DEFAULT_OUTPUT_FILENAME,
        "bucket": {"name": "", "destination": DEFAULT_BUCKET_DESTINATION},
        "firestore": {"collection": "", "database": FIRESTORE_DEFAULT_DATABASE},
        # Slack API options
        "page_size": DEFAULT_PAGE_SIZE,
        "channel_types": DEFAULT_CHANNEL_TYPES,
        "exclude_archived": False,
        "rate_limit_retries": 0,
        # Channel filtering
        "include_channels": [],
        "exclude_channels": [],
        "normalize_messages": False,
        "show_progress": False,
    }

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(default_config, f, default_flow_style=False, sort_keys=False)
        log_with_context(logging.INFO, f"Created default config file at {output_path}")
        return True
    except OSError as e:
        log_with_context(logging.ERROR, f"Failed to create default config file: {e}")
        return False


def should_process_channel(channel_name: str, config: FetcherConfig) -> bool:
    """
    Determine if a Slack channel should be fetched based on configuration filters.

    1. If an include_channels list is specified, only those channels are fetched
    2. Otherwise all channels are fetched except those in exclude_channels

    Args:
        channel_name: The name of the Slack channel
        config: The FetcherConfig instance

    Returns:
        True if the channel should be fetched, False if it should be skipped
    """
    include_channels = set(config.include_channels)
    if include_channels:
        if channel_name in include_channels:
            return True
        log_with_context(
            logging.DEBUG,
            f"CHANNEL CHECK: Channel '{channel_name}' not in include list, skipping",
        )
        return False

    if channel_name in set(config.exclude_channels):
        log_with_context(
            logging.DEBUG,
            f"CHANNEL CHECK: Channel '{channel_name}' is in exclude list, skipping",
        )
        return False

    return True
