"""Shared CLI infrastructure: option decorators, error handlers, and the CLI group."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, ClassVar

import click

if TYPE_CHECKING:
    from googleapiclient.errors import HttpError
    from slack_sdk.errors import SlackApiError

import slack_fetcher
from slack_fetcher.constants import (
    HTTP_FORBIDDEN,
    HTTP_RATE_LIMIT,
    HTTP_SERVER_ERROR_MIN,
    SLACK_AUTH_ERRORS,
    SLACK_RATE_LIMIT_ERROR,
    SLACK_SCOPE_ERROR,
)
from slack_fetcher.exceptions import FetcherError
from slack_fetcher.utils.logging import log_with_context

# ---------------------------------------------------------------------------
# Custom click.Group that defaults to ``fetch``. When the first CLI token is
# a flag rather than a subcommand, ``fetch`` is prepended so that
#   ``slack-fetcher --sink bucket``
# runs a fetch.
# ---------------------------------------------------------------------------


class DefaultGroup(click.Group):
    """Click group that defaults to the ``fetch`` subcommand."""

    # Flags that belong to the group itself and should NOT trigger the
    # ``fetch`` default.
    _GROUP_FLAGS: ClassVar[set[str]] = {"--help", "--version", "-h"}

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Prepend ``fetch`` when the first token is a flag.

        Args:
            ctx: The current Click context.
            args: Raw CLI argument list.

        Returns:
            The (possibly modified) argument list for further parsing.
        """
        if args and args[0].startswith("-") and args[0] not in self._GROUP_FLAGS:
            args = ["fetch", *args]
        return super().parse_args(ctx, args)


# ---------------------------------------------------------------------------
# Shared option decorator
# ---------------------------------------------------------------------------


def common_options(f: Callable[..., None]) -> Callable[..., None]:
    """Decorator that adds options shared across multiple subcommands.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with common options attached.
    """
    f = click.option(
        "--config",
        default="config.yaml",
        show_default=True,
        help="Path to config YAML",
    )(f)
    f = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable verbose console logging (shows DEBUG level messages)",
    )(f)
    f = click.option(
        "--debug_api",
        is_flag=True,
        default=False,
        help="Enable detailed Slack API request/response logging",
    )(f)
    return f


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group(
    cls=DefaultGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=slack_fetcher.__version__, prog_name="slack-fetcher")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Fetch every message of a Slack workspace into a file, bucket, or Firestore.

    Args:
        ctx: The Click context (injected by ``@click.pass_context``).
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


def handle_slack_error(e: SlackApiError) -> None:
    """Handle Slack Web API errors with specific messages.

    Args:
        e: The Slack API error to handle.
    """
    error_code = ""
    if e.response is not None:
        error_code = e.response.get("error", "") or ""

    if error_code in SLACK_AUTH_ERRORS:
        log_with_context(logging.ERROR, f"Slack rejected the token: {error_code}")
        log_with_context(
            logging.INFO, "Check that SLACK_TOKEN holds a valid user or bot token."
        )
    elif error_code == SLACK_SCOPE_ERROR:
        log_with_context(logging.ERROR, f"Slack token is missing a scope: {e}")
        log_with_context(
            logging.INFO,
            "The token needs the channels:read and channels:history scopes.",
        )
    elif error_code == SLACK_RATE_LIMIT_ERROR:
        log_with_context(logging.ERROR, f"Slack rate limit exceeded: {e}")
        log_with_context(
            logging.INFO,
            "Set rate_limit_retries in the config to wait and retry rate-limited calls.",
        )
    else:
        log_with_context(logging.ERROR, f"Slack API error: {e}")


def handle_http_error(e: HttpError) -> None:
    """Handle Google API HTTP errors with specific messages.

    Args:
        e: The Google API HTTP error to handle.
    """
    if e.resp.status == HTTP_FORBIDDEN:
        log_with_context(logging.ERROR, f"Permission denied error: {e}")
        log_with_context(
            logging.INFO,
            "Make sure the service account can write to the bucket or Firestore database.",
        )
    elif e.resp.status == HTTP_RATE_LIMIT:
        log_with_context(logging.ERROR, f"Google API rate limit exceeded: {e}")
    elif e.resp.status >= HTTP_SERVER_ERROR_MIN:
        log_with_context(logging.ERROR, f"Server error from Google API: {e}")
        log_with_context(
            logging.INFO, "This is likely a temporary issue. Please try again later."
        )
    else:
        log_with_context(logging.ERROR, f"Google API error: {e}")


def handle_exception(e: BaseException) -> None:
    """Handle different types of exceptions.

    Args:
        e: The exception to handle.
    """
    from googleapiclient.errors import HttpError
    from slack_sdk.errors import SlackApiError

    if isinstance(e, FetcherError):
        log_with_context(logging.ERROR, str(e))
    elif isinstance(e, SlackApiError):
        handle_slack_error(e)
    elif isinstance(e, HttpError):
        handle_http_error(e)
    elif isinstance(e, FileNotFoundError):
        log_with_context(logging.ERROR, f"File not found: {e}")
        log_with_context(
            logging.INFO,
            "Please check that all required files exist and paths are correct.",
        )
    elif isinstance(e, KeyboardInterrupt):
        log_with_context(logging.WARNING, "Fetch interrupted by user.")
    else:
        log_with_context(logging.ERROR, f"Fetch failed: {e}", exc_info=True)
