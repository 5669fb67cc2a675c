# Centralized logging configuration for the http_contract package.

import logging
import sys

from http_contract.core.context import Context, LogLevel
from http_contract.core.request import Outbound
from http_contract.core.response import Inbound
from http_contract.settings import Settings

# Recommended format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default level if LOG_LEVEL env var is not set
DEFAULT_LOG_LEVEL = "INFO"

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Libraries known to be noisy that we might want to quiet down
NOISY_LIBRARIES = ["httpx", "httpcore"]

# Bodies longer than this are truncated in wire logs
MAX_LOGGED_BODY = 4096


def setup_logging(settings: Settings | None = None):
    """
    Configures logging for test runs.

    Reads the desired log level from the LOG_LEVEL environment variable.
    Defaults to INFO if not set or invalid.
    Sets a standard format and directs logs to stderr.
    Sets louder libraries to WARNING level.
    """
    settings = settings or Settings()
    log_level_name = settings.get_log_level(default=DEFAULT_LOG_LEVEL)

    if log_level_name not in VALID_LOG_LEVELS:
        print(
            f"WARNING: Invalid LOG_LEVEL '{log_level_name}'. "
            f"Defaulting to {DEFAULT_LOG_LEVEL}. "
            f"Valid levels are: {', '.join(VALID_LOG_LEVELS)}",
            file=sys.stderr,
        )
        log_level_name = DEFAULT_LOG_LEVEL

    log_level = logging.getLevelName(log_level_name)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # Quiet down noisy libraries
    for lib_name in NOISY_LIBRARIES:
        logging.getLogger(lib_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured with level {log_level_name}.")


# Wire logging, gated by the context log level

wire_logger = logging.getLogger("http_contract.wire")


def _body(payload: bytes) -> str:
    text = payload[:MAX_LOGGED_BODY].decode("utf-8", errors="replace")
    if len(payload) > MAX_LOGGED_BODY:
        text += f"... ({len(payload)} bytes)"
    return text


def log_outbound(context: Context, outbound: Outbound) -> None:
    """Log the request about to be sent."""
    if context.log_level < LogLevel.INFO:
        return
    wire_logger.info(f"[{context.context_id}] > {outbound.method} {outbound.url}")
    if context.log_level >= LogLevel.DEBUG:
        for name, value in outbound.resolved_headers().items():
            wire_logger.info(f"[{context.context_id}] > {name}: {value}")
        if isinstance(outbound.payload, (bytes, bytearray)) and outbound.payload:
            wire_logger.info(f"[{context.context_id}] > {_body(bytes(outbound.payload))}")


def log_inbound(context: Context, inbound: Inbound) -> None:
    """Log the response received by the transport."""
    if context.log_level < LogLevel.INFO:
        return
    wire_logger.info(f"[{context.context_id}] < HTTP {inbound.status_code}")
    if context.log_level >= LogLevel.DEBUG:
        for name, value in inbound.headers.items():
            wire_logger.info(f"[{context.context_id}] < {name}: {value}")
        if inbound.body:
            wire_logger.info(f"[{context.context_id}] < {_body(inbound.body)}")
