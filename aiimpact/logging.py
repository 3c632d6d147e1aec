"""
Logging helpers for the aiimpact package.

Library modules only ask for a logger::

    from aiimpact.logging import get_logger
    logger = get_logger(__name__)

The Streamlit entry point calls ``configure_logging()`` once to attach a
console handler to the ``aiimpact`` logger. The root logger is never touched.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAME = "aiimpact"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure the ``aiimpact`` logger.

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        AIIMPACT_LOG_LEVEL env var, or "INFO" if unset.
    fmt, datefmt:
        Formatter settings; standard defaults when omitted.
    force:
        Drop existing handlers first. Otherwise a second call is a no-op
        once a stderr handler is attached (Streamlit reruns the script).
    """
    if level is None:
        level = os.environ.get("AIIMPACT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
