# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Interactive exploration shell.

The `explore` subcommand shows a main menu and keeps running the structure,
search and subset flows against one session until the user exits. The dataset
is read once per session and reused for every flow.

A failing flow is reported and the menu is shown again.
"""

import argparse
import logging
from dataclasses import dataclass

from survey_explorer.actions.base import open_session
from survey_explorer.actions.search import SearchAction
from survey_explorer.actions.structure import StructureAction
from survey_explorer.actions.subset import SubsetAction
from survey_explorer.cli_io import is_interactive_tty, prompt_choice
from survey_explorer.config import ConfigError, SurveyConfig
from survey_explorer.errors import SurveyExplorerError
from survey_explorer.session import AnalysisSession


logger = logging.getLogger(__name__)


_MENU: list[tuple[str, str]] = [
    ("structure", "Display survey structure (list of questions)"),
    ("search", "Search for specific question or option"),
    ("subset", "Create a subset of respondents based on question+option"),
    ("clear", "Clear the active subset"),
    ("exit", "Exit the application"),
]


@dataclass(frozen=True)
class ExploreAction:
    """
    `explore` subcommand.

    Requires an interactive terminal.
    """

    name: str = "explore"
    help: str = "Start the interactive exploration menu"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `explore` subcommand.

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
            help="Page to start on when displaying the survey structure (default: 1)",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Run the main menu loop.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If the session is not interactive.
        """

        if not is_interactive_tty():
            raise ConfigError(
                "The explore menu needs an interactive terminal. "
                "Use the structure, search and subset commands instead."
            )

        session = open_session(self, config)
        page = int(getattr(args, "page", 1) or 1)

        print("Survey Analysis Tool")
        print(f"Analyze data from: {session.config.dataset}")

        while True:
            if session.current_subset is not None:
                print(f"Current active subset: {session.current_subset.match_count} respondents")

            choice = prompt_choice("What would you like to do?", _MENU, default="structure")
            if choice == "exit":
                print("Goodbye!")
                return

            self.dispatch(session, choice, page=page)

    def dispatch(self, session: AnalysisSession, choice: str, *, page: int = 1) -> None:
        """Run one menu entry, reporting (not raising) its errors."""

        try:
            if choice == "structure":
                StructureAction().show(session, page=page)
            elif choice == "search":
                SearchAction().search(session)
            elif choice == "subset":
                SubsetAction().create(session)
            elif choice == "clear":
                session.clear()
                print("Active subset cleared.")
            else:
                print(f"Invalid option selected: {choice}")
        except SurveyExplorerError as exc:
            logger.debug("Menu entry %r failed", choice, exc_info=True)
            print(f"error: {exc}")
