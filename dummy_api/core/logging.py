"""
Logging setup for the service.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install the root log handler.

    Safe to call more than once; basicConfig is a no-op after the first call,
    so only the level is refreshed.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG").
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # httpx logs every request at INFO; keep it for DEBUG runs only
    if level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
