"""
Logger - Shared logging setup for gridmission modules

Every module obtains its logger through get_logger() so that all output is
namespaced under "gridmission" and shares one handler and format.
"""

import logging
import os
import sys

ROOT_LOGGER_NAME = "gridmission"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False

def _configure_root() -> logging.Logger:
    """Attach the stream handler to the package root logger once"""

    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not _configured:
        level_name = os.environ.get("GRIDMISSION_LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root

def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the gridmission namespace"""

    root = _configure_root()

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)

    return root.getChild(name)
