# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Logging setup for the command-line tool."""

import logging
import os

from pythonjsonlogger import jsonlogger


LOG_FORMAT_ENV_VAR = "SURVEY_EXPLORER_LOG_FORMAT"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int = logging.WARNING, force_format: str | None = None) -> None:
    """
    Configure the root logger.

    Log records go to stderr so they never mix with the tables and prompts
    printed on stdout.

    Modes:
    - JSON (default)
    - plain text

    Selection order:
        1) force_format argument ("json" or "plain") if provided
        2) env var SURVEY_EXPLORER_LOG_FORMAT
        3) default = "json"
    """

    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv(LOG_FORMAT_ENV_VAR, "json").lower()

    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(_FORMAT)
    else:
        formatter = jsonlogger.JsonFormatter(_FORMAT)

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    logger.handlers.clear()
    logger.addHandler(handler)
