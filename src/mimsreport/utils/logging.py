"""
Logging utilities for the mimsreport package.

Library Logging Conventions
---------------------------
1. **Pipeline code never calls configure_logging()** - it only uses get_logger(__name__).
2. **Entry points call configure_logging()** - the `mimsreport` console script
   and the report viewer app configure output once at startup.
3. When mimsreport is imported by a notebook or another application that has
   configured logging, all mimsreport logs go to that application's handlers.

mimsreport does NOT write any log files.

Example Usage
-------------
In pipeline code (loader.py, aggregator.py, etc.):
    ```python
    from mimsreport.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("reshaped %d participants", n)
    ```

In entry points:
    ```python
    from mimsreport.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

# Default format for mimsreport logs
DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "MIMSREPORT_LOG_LEVEL"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the mimsreport logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to MIMSREPORT_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to a standard format.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding new ones (allows
        reconfiguration). If False, skip if a stderr handler is already present.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("mimsreport")
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

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
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'mimsreport' package logger.
    """
    if name is None:
        name = "mimsreport"
    return logging.getLogger(name)
