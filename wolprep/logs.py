"""Logging setup shared by every command."""

import logging

from wolprep.config import LOG_FORMAT, LOG_LEVEL


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger once per process."""
    level = logging.DEBUG if debug else LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Chatty HTTP client loggers stay at WARNING unless debugging
    if not debug:
        for name in ("httpx", "openai", "urllib3"):
            logging.getLogger(name).setLevel(logging.WARNING)
