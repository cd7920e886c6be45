# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Survey structure action.

The `structure` subcommand lists the schema sheet (one row per question) as a
paged table.
"""

import argparse
from dataclasses import dataclass

from survey_explorer.actions.base import open_session
from survey_explorer.config import SurveyConfig
from survey_explorer.display import browse_pages
from survey_explorer.errors import DatasetError
from survey_explorer.session import AnalysisSession


@dataclass(frozen=True)
class StructureAction:
    """
    `structure` subcommand.

    Shows the list of questions.
    """

    name: str = "structure"
    help: str = "Display the survey structure (list of questions)"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `structure` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "--page",
            type=int,
            default=1,
            help="Page to show first (default: 1)",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute the structure listing.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            DatasetError:
                If the schema sheet cannot be read or is empty.
        """

        session = open_session(self, config)
        self.show(session, page=int(getattr(args, "page", 1) or 1))

    def show(self, session: AnalysisSession, *, page: int = 1) -> None:
        """Print the schema sheet of the session's dataset page by page."""

        print("Survey Structure (Questions)")
        print(f"Loading survey file from: {session.config.schema_file}")

        rows = session.dataset.schema_rows()
        if not rows:
            raise DatasetError("Could not load survey structure: the schema sheet contains no data.")

        browse_pages(rows, page=page, per_page=session.config.display.per_page)
