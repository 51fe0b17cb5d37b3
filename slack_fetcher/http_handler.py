"""
HTTP-triggered entry point for running the fetcher as a Cloud Function.

The function takes its settings from the environment (and an optional
config file named by ``SLACK_FETCHER_CONFIG``), runs one fetch, and answers
with the fetched snapshot as JSON.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from slack_fetcher.constants import ENV_SINK, HTTP_OK, SINK_BUCKET
from slack_fetcher.core.config import load_config
from slack_fetcher.core.context import build_context
from slack_fetcher.core.fetcher import SlackMessageFetcher
from slack_fetcher.utils.logging import log_with_context, setup_logger

ENV_CONFIG_PATH = "SLACK_FETCHER_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"

JSON_HEADERS = {"Content-Type": "application/json"}


def fetch_messages(request: Any = None) -> tuple[str, int, dict[str, str]]:
    """
    Fetch every channel's messages and return them as the response body.

    Sink defaults to the bucket sink unless ``SLACK_FETCHER_SINK`` names
    another. The response is always status 200; when the run aborts the body
    is an empty object.

    Args:
        request: The incoming HTTP request (unused)

    Returns:
        Tuple of (JSON body, status code, headers)
    """
    load_dotenv()
    setup_logger(json_format=True)

    config = load_config(Path(os.environ.get(ENV_CONFIG_PATH, DEFAULT_CONFIG_PATH)))
    context = build_context(
        config, sink=None if os.environ.get(ENV_SINK) else SINK_BUCKET
    )

    result = SlackMessageFetcher(context).run()
    if result.aborted:
        log_with_context(
            logging.ERROR, f"Fetch run aborted: {result.error}"
        )
        body: dict[str, Any] = {}
    else:
        body = result.snapshot

    return json.dumps(body, ensure_ascii=False), HTTP_OK, JSON_HEADERS
