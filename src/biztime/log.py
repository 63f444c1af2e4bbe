"""
Loggers for the biztime package.

Every module logs through a child of the ``biztime`` logger. The first call
to `get_logger` attaches a stdout handler to that parent and sets its level
from ``LOG_LEVEL`` (see `biztime.config`). Records stop at ``biztime`` and
do not reach the root logger, so Flask's and psycopg's own loggers keep
whatever configuration the host process gives them.
"""

import logging
import sys

from biztime.config import config

PACKAGE_LOGGER = "biztime"


def _package_logger() -> logging.Logger:
    parent = logging.getLogger(PACKAGE_LOGGER)
    if not parent.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        parent.addHandler(handler)
        parent.setLevel(config.log_level)
        parent.propagate = False
    return parent


def get_logger(name: str) -> logging.Logger:
    """Logger for a biztime module, e.g. ``get_logger(__name__)``."""
    parent = _package_logger()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return parent.getChild(name)
