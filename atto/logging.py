"""
Logging setup for Atto applications.

Modules log through ``logging.getLogger("atto.<subsystem>")``; this module
only installs a handler when an application or the CLI asks for one.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Union[int, str] = "INFO") -> logging.Logger:
    """
    Configure root logging with the Atto format and set the ``atto`` level.

    Returns the ``atto`` logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = logging.getLogger("atto")
    logger.setLevel(level)
    return logger
