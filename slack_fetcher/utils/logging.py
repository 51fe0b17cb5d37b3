"""
Logging module for the Slack message fetcher
"""

import json
import logging
import os
from typing import Any, Dict, Optional

LOGGER_NAME = "slack_fetcher"

# Module-level flag to track if API debug logging is enabled
_DEBUG_API_ENABLED = False

# LogRecord attributes that are not user-supplied context
_RESERVED_RECORD_ATTRS = frozenset(
    (
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "id",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    )
)

_SENSITIVE_KEYS = ("token", "auth", "password", "secret", "key")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, the shape Cloud Logging parses into fields."""

    def format(self, record):
        data = {
            "time": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        # Include any additional attributes from the record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS and value not in (None, ""):
                data[key] = value
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class EnhancedFormatter(logging.Formatter):
    """
    Custom formatter that supports both verbose mode (with additional context information)
    and API debug mode (with request/response data)
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        verbose=False,
        include_api_details=False,
    ):
        # Use more detailed format for verbose mode
        if verbose:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
        elif not fmt:
            fmt = "%(asctime)s - %(levelname)s - %(message)s"

        super().__init__(fmt, datefmt, style)
        self.include_api_details = include_api_details

    def format(self, record):
        result = super().format(record)

        channel = getattr(record, "channel", None)
        if channel:
            result = f"{result} [channel={channel}]"

        if self.include_api_details:
            if getattr(record, "api_data", None):
                result += f"\nAPI Data: {record.api_data}"
            if getattr(record, "response", None):
                result += f"\nResponse: {record.response}"

        return result


def setup_main_log_file(
    output_dir: str, debug_api: bool = False
) -> logging.FileHandler:
    """
    Set up a file handler that mirrors every fetcher log record to disk.

    Args:
        output_dir: Directory that will hold ``fetch.log``
        debug_api: If True, include request/response details in the file

    Returns:
        The file handler for the log file
    """
    os.makedirs(output_dir, exist_ok=True)
    log_file = os.path.join(output_dir, "fetch.log")

    file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)  # Always use DEBUG level for file handlers
    file_handler.setFormatter(
        EnhancedFormatter(
            "%(asctime)s - %(levelname)s - %(message)s",
            include_api_details=debug_api,
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(file_handler)

    logger.info(f"Log file created at: {log_file}")
    return file_handler


def setup_logger(
    verbose: bool = False,
    debug_api: bool = False,
    output_dir: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Set up and return the logger with appropriate formatting.

    Args:
        verbose: If True, set console handler to DEBUG level; otherwise INFO level
        debug_api: If True, enable detailed API request/response logging
        output_dir: Optional output directory for the log file
        json_format: If True, emit one JSON object per line on the console

    Returns:
        Configured logger instance
    """
    global _DEBUG_API_ENABLED
    _DEBUG_API_ENABLED = debug_api

    logger = logging.getLogger(LOGGER_NAME)

    # Clear any existing handlers to prevent duplicate messages
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)  # Always set logger to DEBUG to capture all logs

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose or debug_api else logging.INFO)
    if json_format:
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(
            EnhancedFormatter(verbose=verbose, include_api_details=debug_api)
        )
    logger.addHandler(console_handler)

    if output_dir:
        setup_main_log_file(output_dir, debug_api)

    if debug_api:
        # slack_sdk logs every request/response on its own logger at DEBUG
        sdk_logger = logging.getLogger("slack_sdk")
        sdk_logger.setLevel(logging.DEBUG)
        for handler in sdk_logger.handlers[:]:
            sdk_logger.removeHandler(handler)
        for handler in logger.handlers:
            sdk_logger.addHandler(handler)
        logger.info("API debug logging enabled")

    return logger


def log_with_context(level: int, message: str, **kwargs: Any) -> None:
    """
    Log a message with additional context information.

    Args:
        level: The logging level (e.g., logging.INFO)
        message: The log message
        **kwargs: Additional context to include in the log record
    """
    exc_info = kwargs.pop("exc_info", None)

    # Filter out None values from kwargs
    extras = {k: v for k, v in kwargs.items() if v is not None}

    logger = logging.getLogger(LOGGER_NAME)
    logger.log(level, message, extra=extras, exc_info=exc_info)


def _redact(params: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def log_api_request(
    method: str, params: Optional[Dict[str, Any]] = None, **kwargs: Any
) -> None:
    """
    Log an API request when API debug logging is enabled.

    Args:
        method: API method name (e.g. ``conversations.history``)
        params: Optional request parameters; secrets are redacted
        **kwargs: Additional context to include in the log record
    """
    if not is_debug_api_enabled():
        return

    log_context = kwargs.copy()
    if params:
        log_context["api_data"] = json.dumps(_redact(params), indent=2, default=str)

    log_with_context(logging.DEBUG, f"API Request: {method}", **log_context)


def log_api_response(
    method: str, response_data: Any = None, **kwargs: Any
) -> None:
    """
    Log an API response when API debug logging is enabled.

    Args:
        method: API method name
        response_data: Optional response payload, truncated when large
        **kwargs: Additional context to include in the log record
    """
    if not is_debug_api_enabled():
        return

    log_context = kwargs.copy()
    if response_data:
        if isinstance(response_data, (dict, list)):
            response_str = json.dumps(response_data, indent=2, default=str)
            if len(response_str) > 2000:
                response_str = response_str[:2000] + "... [truncated]"
        else:
            response_str = str(response_data)
            if len(response_str) > 1000:
                response_str = response_str[:1000] + "... [truncated]"
        log_context["response"] = response_str

    log_with_context(logging.DEBUG, f"API Response: {method}", **log_context)


def is_debug_api_enabled() -> bool:
    """Check if API debug logging is enabled."""
    return _DEBUG_API_ENABLED


def get_logger():
    """Get the slack_fetcher logger, creating it with defaults if needed."""
    fetcher_logger = logging.getLogger(LOGGER_NAME)
    if not fetcher_logger.handlers:
        fetcher_logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(EnhancedFormatter())
        fetcher_logger.addHandler(handler)
    return fetcher_logger


# Module logger - will be properly initialized when setup_logger is called
logger = get_logger()
