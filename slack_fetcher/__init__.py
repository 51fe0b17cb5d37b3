#!/usr/bin/env python3
"""
Slack workspace message fetcher
"""

__version__ = "0.1.0"

from slack_fetcher.core.config import load_config

# Import the main classes and functions for easier access
from slack_fetcher.core.fetcher import SlackMessageFetcher
from slack_fetcher.services.channels import ChannelEnumerator
from slack_fetcher.services.history import HistoryFetcher, normalize_message
from slack_fetcher.services.sinks import (
    BucketSink,
    DocumentStoreSink,
    FileSink,
    Sink,
    create_sink,
)
