"""Application logging configuration."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Third-party clients that log every HTTP request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging once for the CLI and the API server."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
