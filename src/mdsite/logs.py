"""Logging setup for the command line driver"""

import logging


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send mdsite log records to stderr at the given level name.

    basicConfig is a no-op when the root logger already has handlers, so an
    embedding application (or a test runner) keeps its own setup.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("mdsite").setLevel(numeric)
