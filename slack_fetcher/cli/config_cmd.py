"""CLI command handler for writing a default configuration file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from slack_fetcher.cli.common import cli
from slack_fetcher.core.config import create_default_config
from slack_fetcher.utils.logging import setup_logger

# ---------------------------------------------------------------------------
# init-config subcommand
# ---------------------------------------------------------------------------


@cli.command("init-config")
@click.option(
    "--config",
    default="config.yaml",
    show_default=True,
    help="Where to write the config YAML",
)
def init_config(config: str) -> None:
    """Write a default config file; an existing file is left untouched.

    Args:
        config: Path of the config YAML to create.
    """
    setup_logger()
    if not create_default_config(Path(config)):
        sys.exit(1)
