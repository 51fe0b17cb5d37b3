"""CLI command handler for the fetch workflow."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from slack_fetcher.cli.common import cli, common_options, handle_exception
from slack_fetcher.constants import SINK_BUCKET, SINK_FILE, VALID_SINKS
from slack_fetcher.core.config import load_config
from slack_fetcher.core.context import FetchContext, build_context
from slack_fetcher.core.fetcher import SlackMessageFetcher
from slack_fetcher.types import RunResult
from slack_fetcher.utils.logging import log_with_context, setup_logger


def log_startup_info(context: FetchContext, config_path: str) -> None:
    """Log the settings a fetch run will use."""
    config = context.config
    log_with_context(logging.INFO, "Starting fetch with the following parameters:")
    log_with_context(logging.INFO, f"- Config: {Path(config_path).resolve()}")
    log_with_context(logging.INFO, f"- Sink: {config.sink}")
    if config.sink == SINK_FILE:
        log_with_context(logging.INFO, f"- Output file: {config.output_file}")
    elif config.sink == SINK_BUCKET:
        log_with_context(
            logging.INFO,
            f"- Destination: gs://{config.bucket.name}/{config.bucket.destination}",
        )
    else:
        log_with_context(
            logging.INFO, f"- Firestore collection: {config.firestore.collection}"
        )
    log_with_context(logging.INFO, f"- Page size: {config.page_size}")
    log_with_context(logging.INFO, f"- Dry run: {context.dry_run}")


def log_run_summary(result: RunResult) -> None:
    """Log the outcome of a fetch run."""
    summary = result.summary
    if result.aborted:
        log_with_context(logging.ERROR, f"Fetch aborted: {result.error}")
        log_with_context(
            logging.INFO,
            f"{len(summary.channels_processed)} channel(s) were processed before the run stopped.",
        )
        return

    log_with_context(logging.INFO, "")
    log_with_context(logging.INFO, "Fetch completed.")
    log_with_context(logging.INFO, f"   • Channels listed: {summary.channels_listed}")
    log_with_context(
        logging.INFO, f"   • Channels fetched: {len(summary.channels_processed)}"
    )
    if summary.channels_skipped:
        log_with_context(
            logging.INFO, f"   • Channels skipped: {len(summary.channels_skipped)}"
        )
    log_with_context(logging.INFO, f"   • Messages: {summary.messages_fetched}")
    if summary.partial:
        log_with_context(
            logging.WARNING,
            f"   • Failed channels: {', '.join(sorted(summary.failed_channels))}",
        )


# ---------------------------------------------------------------------------
# fetch subcommand
# ---------------------------------------------------------------------------


@cli.command()
@common_options
@click.option(
    "--sink",
    type=click.Choice(VALID_SINKS),
    default=None,
    help="Where to store the messages (overrides the config file)",
)
@click.option(
    "--output",
    default=None,
    help="Output JSON path for the file sink (overrides the config file)",
)
@click.option(
    "--dry_run",
    is_flag=True,
    default=False,
    help="Fetch from Slack but only log what would be written",
)
@click.option(
    "--log_dir",
    default=None,
    help="Directory for fetch.log (console only when omitted)",
)
def fetch(
    config: str,
    verbose: bool,
    debug_api: bool,
    sink: str | None,
    output: str | None,
    dry_run: bool,
    log_dir: str | None,
) -> None:
    """Fetch every channel's history and persist it to the configured sink.

    Args:
        config: Path to config YAML.
        verbose: Enable verbose console logging.
        debug_api: Enable detailed API request/response logging.
        sink: Sink override.
        output: Output path override for the file sink.
        dry_run: Log sink writes instead of performing them.
        log_dir: Directory for the log file.
    """
    load_dotenv()
    setup_logger(verbose, debug_api, log_dir)

    try:
        context = build_context(
            load_config(Path(config)),
            sink=sink,
            output_file=output,
            dry_run=dry_run,
            verbose=verbose,
            debug_api=debug_api,
        )
        log_startup_info(context, config)
        result = SlackMessageFetcher(context).run()
    except Exception as e:
        handle_exception(e)
        sys.exit(1)

    log_run_summary(result)
    if result.aborted:
        sys.exit(1)
