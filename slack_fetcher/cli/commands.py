#!/usr/bin/env python3
"""
Main execution module for the Slack message fetcher.

Registers every subcommand on the click group and exposes ``main`` as the
console-script entry point.
"""

from __future__ import annotations

from slack_fetcher.cli import channels_cmd, config_cmd, fetch_cmd  # noqa: F401
from slack_fetcher.cli.common import cli, handle_exception


def main() -> None:
    """Main entry point for the Slack message fetcher."""
    cli()


__all__ = ["cli", "handle_exception", "main"]


if __name__ == "__main__":
    main()
