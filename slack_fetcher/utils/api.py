"""
API client construction for the Slack message fetcher
"""

import logging
from typing import Any, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build
from slack_sdk import WebClient
from slack_sdk.http_retry.builtin_handlers import RateLimitErrorRetryHandler

from slack_fetcher.utils.logging import log_with_context

# Cache for service instances
_service_cache: Dict[str, Any] = {}


def get_slack_client(token: str, rate_limit_retries: int = 0) -> WebClient:
    """Build a Slack Web API client for the given token.

    With ``rate_limit_retries`` left at 0 the client gives up on the first
    429, which is the fetcher's default behaviour. A positive value attaches
    slack_sdk's handler that sleeps for ``Retry-After`` and tries again.
    """
    # slack_sdk installs a connection-error retry handler unless told otherwise
    client = WebClient(token=token, retry_handlers=[])
    if rate_limit_retries > 0:
        client.retry_handlers.append(
            RateLimitErrorRetryHandler(max_retry_count=rate_limit_retries)
        )
        log_with_context(
            logging.DEBUG,
            f"Slack client will retry rate-limited calls up to {rate_limit_retries} times",
        )
    return client


def get_gcp_service(
    creds_path: str,
    api: str,
    version: str,
    scopes: List[str],
    channel: Optional[str] = None,
) -> Any:
    """Get a Google API client service authenticated as the service account."""
    cache_key = f"{creds_path}:{api}:{version}"
    if cache_key in _service_cache:
        log_with_context(
            logging.DEBUG,
            f"Using cached service for {api} {version}",
            channel=channel,
        )
        return _service_cache[cache_key]

    try:
        log_with_context(
            logging.DEBUG,
            f"Creating new service for {api} {version} with scopes {scopes}",
            channel=channel,
        )

        creds = service_account.Credentials.from_service_account_file(
            creds_path, scopes=scopes
        )
        service = build(api, version, credentials=creds, cache_discovery=False)

        _service_cache[cache_key] = service
        return service
    except Exception as e:
        log_with_context(
            logging.ERROR,
            f"Failed to create {api} service: {e}",
            api=api,
            version=version,
        )
        raise
