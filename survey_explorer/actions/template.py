# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `survey.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from survey_explorer.cli_io import is_interactive_tty, prompt_overwrite
from survey_explorer.config import DEFAULT_CONFIG_NAME, ConfigError, SurveyConfig


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not require a YAML config because it produces one.
    """

    name: str = "template"
    help: str = "Write a template survey.yaml config"
    requires_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Survey export to explore (.xlsx, .ods or .csv), relative to this file.",
            "# Can be overridden with the SURVEY_EXPLORER_DATASET environment variable",
            "# (also read from a .env file) or the --dataset option.",
            "dataset: resources/so_2024_raw.xlsx",
            "",
            "# Sheet holding one row per respondent (0-based index or sheet name)",
            "responses_sheet: 0",
            "",
            "# Optional: only read the first N response rows",
            "# max_rows: 250",
            "",
            "# Question schema (one row per question)",
            "schema:",
            "  # Optional: read the schema from a separate file (required for .csv datasets)",
            "  # file: resources/so_2024_schema.csv",
            "  sheet: 1",
            "  # Column headers. If omitted, the last header containing 'id' and the",
            "  # last header containing 'text' are used, else the first two columns.",
            "  # id_column: QuestionID",
            "  # text_column: QuestionText",
            "  # Optional: column naming the response sheet column of each question",
            "  # key_column: ColumnName",
            "",
            "# Display options (optional; defaults shown)",
            "# display:",
            "#   per_page: 20",
            "#   preview_limit: 5",
            "#   preview_columns: 5",
            "#   truncate_length: 50",
            "#   label_length: 80",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `template` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "path",
            nargs="?",
            default=DEFAULT_CONFIG_NAME,
            help=f"Destination path for the template (default: ./{DEFAULT_CONFIG_NAME})",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute the template writer.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Unused for this action.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists, `--force` is not set and the user
                cannot be asked (or declines).
        """

        _ = config
        dest = Path(args.path)

        force = bool(args.force)
        if dest.exists() and not force and is_interactive_tty():
            force = prompt_overwrite(dest)
            if not force:
                print(f"Keeping existing file: {dest}")
                return

        self._write_template(dest, force=force)
        print(f"Wrote template config to: {dest}")

    def _write_template(self, dest: Path, *, force: bool) -> None:
        """
        Write a template YAML configuration file.

        Args:
            dest:
                Destination path for the template.
            force:
                If True, overwrite an existing file.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists and `force` is False.
            OSError:
                If the file cannot be written.
        """

        if dest.exists() and not force:
            raise ConfigError(f"Refusing to overwrite existing file: {dest} (use --force)")

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
