"""Logging helpers for the domain layer.

The library never installs handlers on import. Applications that want to see
engine debug output call configure_logging() once at startup; modules obtain
their logger through get_logger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the standard format.

    Args:
        level: "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).info("Logging initialized with level %s", level)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger.

    Usage:
        from slicingpie_domain.logging import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
