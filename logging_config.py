"""
Logging configuration for gapi-transport.

Simple setup that adapters and tools can import.
Extractors should NOT log (they're pure functions).
"""

import logging
import sys

# Create logger for the package
logger = logging.getLogger("gapi")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for gapi-transport.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper()))

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


# NOTE: Call configure_logging() explicitly in cli.py or test setup.
# We don't auto-configure to avoid side effects on import.


def log_api_call(method: str, url: str, **params: object) -> None:
    """Log an outgoing HTTP call with key parameters."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    if param_str:
        logger.debug(f"HTTP: {method} {url} ({param_str})")
    else:
        logger.debug(f"HTTP: {method} {url}")


def log_api_result(method: str, url: str, status: int) -> None:
    """Log a successful response."""
    logger.debug(f"HTTP: {method} {url} -> {status}")


def log_api_error(method: str, url: str, code: int, message: str) -> None:
    """Log a normalized error response."""
    logger.info(f"HTTP: {method} {url} failed with {code}: {message}")
