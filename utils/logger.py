"""
utils/logger.py
---------------
Logging setup for the Jobly data layer.
Repositories log writes at INFO, db/connection.py logs store failures at
ERROR; every module gets its logger through `get_logger(__name__)`.
The root level comes from the LOG_LEVEL environment variable (default INFO).
"""

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_configured = False


def _configure_root() -> None:
    """Send every record to stdout, once per process."""
    global _configured
    if _configured:
        return
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(stdout_handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a Jobly module, e.g. ``get_logger(__name__)`` in
    repositories/company_repo.py gives ``repositories.company_repo``.

    An unknown LOG_LEVEL falls back to INFO.
    """
    _configure_root()
    return logging.getLogger(name)
