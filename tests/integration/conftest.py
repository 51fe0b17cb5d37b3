"""Integration test configuration.

These tests talk to a real Slack workspace and are skipped by default.
Set the SLACK_TOKEN environment variable to a token with channels:read and
channels:history to enable them.
"""

import os

import pytest

skip_no_token = pytest.mark.skipif(
    not os.environ.get("SLACK_TOKEN"),
    reason="Integration tests require SLACK_TOKEN env var",
)
