"""CLI command handler for listing workspace channels."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from slack_fetcher.cli.common import cli, common_options, handle_exception
from slack_fetcher.constants import SINK_FILE
from slack_fetcher.core.config import load_config
from slack_fetcher.core.context import build_context
from slack_fetcher.services.channels import ChannelEnumerator
from slack_fetcher.utils.api import get_slack_client
from slack_fetcher.utils.logging import setup_logger

# ---------------------------------------------------------------------------
# list-channels subcommand
# ---------------------------------------------------------------------------


@cli.command("list-channels")
@common_options
def list_channels(config: str, verbose: bool, debug_api: bool) -> None:
    """Print the id and name of every channel the token can see.

    Unlike ``fetch``, a failure to list channels is reported and exits
    non-zero instead of being treated as an empty workspace.

    Args:
        config: Path to config YAML.
        verbose: Enable verbose console logging.
        debug_api: Enable detailed API request/response logging.
    """
    load_dotenv()
    setup_logger(verbose, debug_api)

    try:
        # Listing never touches a sink, so only the Slack token is required
        context = build_context(load_config(Path(config)), sink=SINK_FILE)
        cfg = context.config
        enumerator = ChannelEnumerator(
            get_slack_client(
                context.slack_token, rate_limit_retries=cfg.rate_limit_retries
            ),
            page_size=cfg.page_size,
            channel_types=cfg.channel_types,
            exclude_archived=cfg.exclude_archived,
        )
        channels = enumerator.try_list_channels().unwrap()
    except Exception as e:
        handle_exception(e)
        sys.exit(1)

    for channel in channels:
        click.echo(f"{channel.id}\t{channel.name}")
