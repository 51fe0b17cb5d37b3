"""Immutable fetch context.

FetchContext is a frozen dataclass that holds the loaded configuration and
the credentials taken from the process environment. It is built once at
startup, before any API call, so that a missing token or credential file
fails the run immediately.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Mapping

from slack_fetcher.constants import (
    ENV_BUCKET,
    ENV_COLLECTION,
    ENV_CREDENTIALS,
    ENV_PROJECT_ID,
    ENV_SINK,
    ENV_SLACK_TOKEN,
    SINK_BUCKET,
    SINK_FIRESTORE,
)
from slack_fetcher.core.config import FetcherConfig
from slack_fetcher.exceptions import ConfigError
from slack_fetcher.utils.logging import log_with_context


@dataclass(frozen=True)
class FetchContext:
    """Immutable context for a fetch run. Created once, shared everywhere."""

    # Credentials
    slack_token: str
    project_id: str | None
    creds_path: str | None

    # Loaded configuration
    config: FetcherConfig

    # Mode flags
    dry_run: bool = False
    verbose: bool = False
    debug_api: bool = False

    @property
    def log_prefix(self) -> str:
        return "[DRY RUN] " if self.dry_run else ""


def _apply_overrides(
    config: FetcherConfig, environ: Mapping[str, str], sink: str | None
) -> FetcherConfig:
    """Layer environment and command-line overrides on top of the YAML config."""
    changes = {}

    sink = sink or environ.get(ENV_SINK)
    if sink:
        changes["sink"] = sink
    if environ.get(ENV_BUCKET):
        changes["bucket"] = dataclasses.replace(
            config.bucket, name=environ[ENV_BUCKET]
        )
    if environ.get(ENV_COLLECTION):
        changes["firestore"] = dataclasses.replace(
            config.firestore, collection=environ[ENV_COLLECTION]
        )

    if not changes:
        return config
    try:
        return dataclasses.replace(config, **changes)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def build_context(
    config: FetcherConfig,
    *,
    environ: Mapping[str, str] | None = None,
    sink: str | None = None,
    output_file: str | None = None,
    dry_run: bool = False,
    verbose: bool = False,
    debug_api: bool = False,
) -> FetchContext:
    """
    Validate required settings and build the context for one run.

    Args:
        config: Configuration loaded from YAML
        environ: Process environment (defaults to ``os.environ``)
        sink: Optional sink override from the command line
        output_file: Optional output path override for the file sink
        dry_run: Log sink writes instead of performing them
        verbose: Verbose logging was requested
        debug_api: API request/response logging was requested

    Returns:
        The validated FetchContext

    Raises:
        ConfigError: If a required value is missing
    """
    if environ is None:
        environ = os.environ

    config = _apply_overrides(config, environ, sink)
    if output_file:
        config = dataclasses.replace(config, output_file=output_file)

    missing = []
    token = environ.get(ENV_SLACK_TOKEN, "")
    if not token:
        missing.append(ENV_SLACK_TOKEN)

    project_id = environ.get(ENV_PROJECT_ID) or None
    creds_path = environ.get(ENV_CREDENTIALS) or None
    needs_google = config.sink in (SINK_BUCKET, SINK_FIRESTORE)
    if needs_google and not dry_run:
        if not project_id:
            missing.append(ENV_PROJECT_ID)
        if not creds_path:
            missing.append(ENV_CREDENTIALS)

    if missing:
        raise ConfigError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    if needs_google and creds_path and not dry_run and not os.path.exists(creds_path):
        raise ConfigError(f"Credentials file not found: {creds_path}")

    if config.sink == SINK_BUCKET and not config.bucket.name:
        raise ConfigError(
            f"The bucket sink needs a bucket name (bucket.name in the config or {ENV_BUCKET})"
        )
    if config.sink == SINK_FIRESTORE and not config.firestore.collection:
        raise ConfigError(
            "The firestore sink needs a top-level collection "
            f"(firestore.collection in the config or {ENV_COLLECTION})"
        )

    context = FetchContext(
        slack_token=token,
        project_id=project_id,
        creds_path=creds_path,
        config=config,
        dry_run=dry_run,
        verbose=verbose,
        debug_api=debug_api,
    )
    log_with_context(
        logging.DEBUG,
        f"{context.log_prefix}Fetch context ready: sink={config.sink}, page_size={config.page_size}",
    )
    return context
