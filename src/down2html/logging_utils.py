#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/logging_utils.py
"""Logging setup for the down2html command line.

Handlers are attached to the ``down2html`` package logger rather than the
root logger, and records stop there. An application that embeds the library
and also calls ``configure_logging`` keeps its own root handlers.

Trace mode opens the grammar logger (``down2html.parsers``) to DEBUG on its
own, so the per-term dispatch messages and nesting decisions can be read
without turning on debug output everywhere else.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "down2html"
GRAMMAR_LOGGER = "down2html.parsers"

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric level.

    Unknown names fall back to ``logging.INFO``.

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the handlers of the ``down2html`` logger.

    Calling this again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "WARNING").
    log_file : str, optional
        Path to a log file that receives a copy of the output.
    trace_mode : bool, default False
        Emit timestamps and logger names, and log every grammar decision
        at DEBUG regardless of ``log_level``.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    resolved_level = resolve_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved_level)
    package_logger.propagate = False
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    logging.getLogger(GRAMMAR_LOGGER).setLevel(logging.DEBUG if trace_mode else logging.NOTSET)

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    # Handlers pass everything; the logger levels above decide what is emitted.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
