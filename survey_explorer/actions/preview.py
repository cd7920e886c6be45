# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Import preview action.

The `preview` subcommand streams the first rows of the response sheet. It is
a quick way to check that the dataset file, sheet selection and header row
are understood before starting an exploration session.
"""

import argparse
import itertools
from dataclasses import dataclass

from survey_explorer.actions.base import open_session
from survey_explorer.config import ConfigError, SurveyConfig
from survey_explorer.display import render_table


@dataclass(frozen=True)
class PreviewAction:
    """
    `preview` subcommand.

    Reads only as many rows as requested.
    """

    name: str = "preview"
    help: str = "Test the dataset import by reading the first response rows"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `preview` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            help="Number of response rows to read (default: 10)",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute the import preview.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If the limit is not positive.
            DatasetError:
                If the dataset cannot be read.
        """

        limit = int(getattr(args, "limit", 10))
        if limit <= 0:
            raise ConfigError("--limit must be > 0")

        session = open_session(self, config)
        dataset = session.dataset

        print(f"Loading survey file from: {dataset.path}")
        print(f"Worksheets: {', '.join(dataset.sheet_names())}")
        print(f"Importing first {limit} rows...")

        rows = list(itertools.islice(dataset.iter_responses(), limit))
        print(f"Successfully imported {len(rows)} rows")

        if rows:
            first = rows[0]
            print("First row sample:")
            render_table(
                ["Column", "Value"],
                [{"Column": key, "Value": value} for key, value in first.items()],
            )
