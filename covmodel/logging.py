# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of covmodel 1.1+main, a coverage tree model for
# code coverage and mutation testing reports.
#
# _____________________________________________________________________________
#
# Copyright (c) 2022-2026 the covmodel authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

import logging
import os
import sys
from typing import Any, Dict, Optional
from colorlog import ColoredFormatter

from .options import Options

LOGGER = logging.getLogger("covmodel")
DEFAULT_LOGGING_HANDLER = logging.StreamHandler(sys.stderr)

LOG_FORMAT = "(%(levelname)s) %(message)s"
COLOR_LOG_FORMAT = f"%(log_color)s{LOG_FORMAT}"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

# Prefixes turning log messages into annotations of the CI system.
CI_LOGGING_PREFIXES = {
    "TF_BUILD": {
        logging.WARNING: "##vso[task.logissue type=warning]",
        logging.ERROR: "##vso[task.logissue type=error]",
    },
    "GITHUB_ACTIONS": {
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
    },
}


class CiFormatter(logging.Formatter):
    """Formatter emitting warnings and errors as CI annotations."""

    def __init__(self, prefixes: Dict[int, str]) -> None:
        super().__init__(fmt=LOG_FORMAT)
        self.prefixes = prefixes

    def format(self, record: logging.LogRecord) -> str:
        if (prefix := self.prefixes.get(record.levelno)) is None:
            return ""
        return f"{prefix}{super().format(record)}"


def __colored_formatter(options: Optional[Options] = None) -> ColoredFormatter:
    """Configure the colored logging formatter."""
    return ColoredFormatter(
        COLOR_LOG_FORMAT,
        datefmt=None,
        reset=True,
        log_colors=LOG_COLORS,
        secondary_log_colors={},
        style="%",
        force_color=getattr(options, "force_color", False),
        no_color=getattr(options, "no_color", False),
        stream=sys.stderr,
    )


def get_ci_logging_prefixes() -> Optional[Dict[int, str]]:
    """Get the annotation prefixes of the CI system we are running in, if any."""
    for variable, prefixes in CI_LOGGING_PREFIXES.items():
        if variable in os.environ:
            return prefixes
    return None


def configure_logging() -> None:
    """Configure the logging module."""
    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter())
    logging.basicConfig(level=logging.INFO, handlers=[DEFAULT_LOGGING_HANDLER])

    if (prefixes := get_ci_logging_prefixes()) is not None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CiFormatter(prefixes))
        logging.getLogger().addHandler(handler)

    def exception_hook(exc_type: Any, exc_value: Any, exc_traceback: Any) -> None:
        logging.exception(
            "Uncaught EXCEPTION", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = exception_hook


def update_logging(options: Options) -> None:
    """Update the logger configuration depending on the options."""
    LOGGER.setLevel(logging.DEBUG if options.verbose else logging.INFO)

    DEFAULT_LOGGING_HANDLER.setFormatter(__colored_formatter(options))
