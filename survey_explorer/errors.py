# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Exception hierarchy shared by the CLI, config and dataset layers."""


class SurveyExplorerError(Exception):
    """Base exception for all survey_explorer errors."""

    pass


class ConfigError(SurveyExplorerError):
    """
    Raised when the YAML configuration is missing, invalid, or cannot be parsed,
    and for command-line usage problems.
    """

    pass


class DatasetError(SurveyExplorerError):
    """
    Raised when the survey dataset cannot be located or read: missing file,
    unsupported format, unknown sheet or a broken spreadsheet.
    """

    pass
