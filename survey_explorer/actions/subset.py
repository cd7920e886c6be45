# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Respondent subset action.

The `subset` subcommand selects all respondents whose answer to one question
contains any of the chosen values, then prints how many matched together with
a short preview.

Question and values are either passed as options or picked from menus. The
values offered are the distinct answers actually observed for the question,
with multi-select cells split on `;`.
"""

import argparse
import logging
from dataclasses import dataclass

from survey_explorer.actions.base import open_session
from survey_explorer.cli_io import is_interactive_tty, prompt_choice, prompt_multi_choice
from survey_explorer.config import ConfigError, SurveyConfig
from survey_explorer.dataset import QuestionDescriptor
from survey_explorer.display import render_table, shorten
from survey_explorer.errors import DatasetError
from survey_explorer.session import AnalysisSession
from survey_explorer.subset import Subset, build_subset, distinct_values, summarize_subset


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubsetAction:
    """
    `subset` subcommand.

    Builds a respondent subset from a question/value selection.
    """

    name: str = "subset"
    help: str = "Create a subset of respondents based on question + option"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `subset` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "-q",
            "--question",
            help="Question identifier (prompted for if omitted)",
        )
        parser.add_argument(
            "-v",
            "--value",
            dest="values",
            action="append",
            help="Answer value to match; repeat for several (respondents matching ANY are included)",
        )
        parser.add_argument(
            "--list-values",
            action="store_true",
            help="Only print the distinct answer values of the question",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute subset creation.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If a required choice is missing in a non-interactive session.
            DatasetError:
                If the dataset cannot be read.
        """

        session = open_session(self, config)
        question_id = getattr(args, "question", None)

        if bool(getattr(args, "list_values", False)):
            if not question_id:
                raise ConfigError("--list-values requires --question")
            self.list_values(session, question_id)
            return

        self.create(session, question_id=question_id, values=getattr(args, "values", None))

    def list_values(self, session: AnalysisSession, question_id: str) -> None:
        """Print the distinct answer values observed for a question."""

        question = self._resolve_question(session, question_id)
        values = distinct_values(session.dataset.iter_responses(), question.raw_column_key)
        if not values:
            print(f"No options found for question {question.identifier} in the survey data.")
            return

        for value in values:
            print(value)

    def create(
        self,
        session: AnalysisSession,
        *,
        question_id: str | None = None,
        values: list[str] | None = None,
    ) -> Subset | None:
        """
        Build a subset and make it the session's active subset.

        Missing question or values are prompted for.

        Returns:
            The subset, or None if nothing could be built (no data, no
            options or no matching respondents).
        """

        print("Create Respondents Subset")

        question = (
            self._resolve_question(session, question_id)
            if question_id
            else self._prompt_question(session)
        )

        print(f"Selected Question: {question.identifier}")
        if question.label:
            print(question.label)

        print("Loading survey data...")
        responses = session.dataset.responses()
        if not responses:
            print("No survey data available: the response sheet contains no rows.")
            return None

        targets = [v for v in (values or []) if v]
        if not targets:
            targets = self._prompt_values(session, question, responses)
            if not targets:
                return None

        print("Creating subset based on selected criteria...")
        subset = build_subset(responses, question.raw_column_key, targets)
        logger.info(
            "Subset for %s %r: %d of %d respondents",
            question.identifier,
            targets,
            subset.match_count,
            len(responses),
        )

        if not subset:
            print("No respondents match the selected criteria.")
            return None

        session.activate(subset)
        print(f"Subset created successfully with {subset.match_count} respondents.")
        self._print_preview(session, subset)
        return subset

    def _resolve_question(self, session: AnalysisSession, question_id: str) -> QuestionDescriptor:
        """
        Look up a question given on the command line.

        Identifiers that are not in the schema are still usable: they are
        taken as response column keys as-is.
        """

        question_id = question_id.strip()
        try:
            question = session.dataset.question(question_id)
        except DatasetError as exc:
            logger.warning("Schema unavailable, using %r as column key: %s", question_id, exc)
            question = None

        if question is None:
            logger.info("Question %r not found in schema", question_id)
            return QuestionDescriptor(identifier=question_id)
        return question

    def _prompt_question(self, session: AnalysisSession) -> QuestionDescriptor:
        if not is_interactive_tty():
            raise ConfigError("--question is required in non-interactive mode")

        schema = session.dataset.schema()
        if not schema:
            raise DatasetError("Could not load survey structure: the schema sheet contains no data.")

        length = session.config.display.label_length
        choices: list[tuple[str, str]] = []
        seen: set[str] = set()
        for q in schema:
            if q.identifier in seen:
                continue
            seen.add(q.identifier)
            text = f"{q.identifier}: {shorten(q.label, length)}" if q.label else q.identifier
            choices.append((q.identifier, text))

        selected = prompt_choice("Select a question to filter respondents", choices)
        question = session.dataset.question(selected)
        return question if question is not None else QuestionDescriptor(identifier=selected)

    def _prompt_values(
        self,
        session: AnalysisSession,
        question: QuestionDescriptor,
        responses: list[dict[str, str | None]],
    ) -> list[str]:
        options = distinct_values(responses, question.raw_column_key)
        if not options:
            print(f"No options found for question {question.identifier} in the survey data.")
            return []

        if not is_interactive_tty():
            raise ConfigError("--value is required in non-interactive mode")

        length = session.config.display.label_length
        return prompt_multi_choice(
            "Select one or more options (respondents who selected ANY of these will be included)",
            [(o, shorten(o, length)) for o in options],
        )

    def _print_preview(self, session: AnalysisSession, subset: Subset) -> None:
        display = session.config.display
        summary = summarize_subset(
            subset,
            preview_limit=display.preview_limit,
            truncate_length=display.truncate_length,
        )
        if not summary.preview:
            return

        columns = list(summary.preview[0].keys())[: display.preview_columns]
        rows = [{c: (r.get(c) if r.get(c) is not None else "N/A") for c in columns} for r in summary.preview]

        print(f"Sample of the subset (first {len(summary.preview)} respondents):")
        render_table(columns, rows)
