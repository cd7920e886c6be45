# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Question search action.

The `search` subcommand finds questions whose code, text or any other schema
column mentions a search term.
"""

import argparse
from dataclasses import dataclass

from survey_explorer.actions.base import open_session
from survey_explorer.cli_io import is_interactive_tty, prompt_text
from survey_explorer.config import ConfigError, SurveyConfig
from survey_explorer.display import browse_pages
from survey_explorer.errors import DatasetError
from survey_explorer.search import search_questions
from survey_explorer.session import AnalysisSession


@dataclass(frozen=True)
class SearchAction:
    """
    `search` subcommand.

    Searches the schema for a keyword.
    """

    name: str = "search"
    help: str = "Search for a specific question or option"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `search` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "term",
            nargs="?",
            help="Search term (prompted for if omitted)",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute the search.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If no term is given in a non-interactive session.
            DatasetError:
                If the schema cannot be read.
        """

        session = open_session(self, config)
        self.search(session, getattr(args, "term", None))

    def search(self, session: AnalysisSession, term: str | None = None) -> None:
        """Search the session's schema, prompting for the term if needed."""

        print("Search for Question or Option")

        if not term or not term.strip():
            if not is_interactive_tty():
                raise ConfigError("A search term is required in non-interactive mode")
            term = prompt_text("Enter search term (e.g. language, experience)")

        term = term.strip()
        print(f"Searching for: {term}")

        schema = session.dataset.schema()
        if not schema:
            raise DatasetError("Could not load survey structure: the schema sheet contains no data.")

        results = search_questions(schema, term)
        if not results:
            print(f"No results found for '{term}'.")
            return

        print(f"Found {len(results)} results for '{term}':")
        browse_pages([q.attributes for q in results], per_page=session.config.display.per_page)
