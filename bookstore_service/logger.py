"""
Shared logger for the bookstore service.

Diagnostics go to stderr so stdout carries nothing but query results.
"""

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _build_logger(name: str = "bookstore") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(LOG_LEVEL.upper())
    log.propagate = False
    return log


logger = _build_logger()
