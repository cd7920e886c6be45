# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading `survey.yaml`, validating its keys, and
normalizing paths so that downstream actions can rely on a typed config object.

The dataset location can also come from the `SURVEY_EXPLORER_DATASET`
environment variable (or a `.env` file) and from the `--dataset` option. With
either of these a config file is optional and defaults are used.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from survey_explorer.errors import ConfigError
from survey_explorer.sheets.base import SheetRef


DATASET_ENV_VAR = "SURVEY_EXPLORER_DATASET"

DEFAULT_CONFIG_NAME = "survey.yaml"


@dataclass(frozen=True)
class SchemaConfig:
    """
    Where and how to read the question schema.

    Attributes:
        file:
            Optional separate spreadsheet holding the schema. If None, the
            schema is read from the dataset file.
        sheet:
            Sheet index (0-based) or name of the schema sheet.
        id_column:
            Header of the question identifier column. Detected if None.
        text_column:
            Header of the question text column. Detected if None.
        key_column:
            Header of the column naming the response column of each question.
            If None, the identifier doubles as the response column key.
    """

    file: Path | None = None
    sheet: SheetRef = 1
    id_column: str | None = None
    text_column: str | None = None
    key_column: str | None = None


@dataclass(frozen=True)
class DisplayConfig:
    """
    Presentation settings for the interactive shell.

    Attributes:
        per_page:
            Rows per page when paging through tables.
        preview_limit:
            Number of respondents shown in a subset preview.
        preview_columns:
            Number of leading columns shown in a subset preview.
        truncate_length:
            Maximum characters per value in a subset preview (hard cut).
        label_length:
            Maximum characters of question labels and answer options in
            selection prompts (cut with "...").
    """

    per_page: int = 20
    preview_limit: int = 5
    preview_columns: int = 5
    truncate_length: int = 50
    label_length: int = 80


@dataclass(frozen=True)
class SurveyConfig:
    """
    Parsed configuration for an exploration session.

    Attributes:
        config_path:
            Path to the YAML config file used, or None if running on defaults.
        base_dir:
            Directory that relative paths are resolved against.
        dataset:
            Spreadsheet holding the survey responses.
        responses_sheet:
            Sheet index (0-based) or name of the response sheet.
        max_rows:
            Optional cap on the number of response rows read.
        schema:
            Schema sheet settings.
        display:
            Presentation settings.
    """

    config_path: Path | None
    base_dir: Path
    dataset: Path
    responses_sheet: SheetRef = 0
    max_rows: int | None = None
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @property
    def schema_file(self) -> Path:
        """Spreadsheet that holds the schema sheet."""

        return self.schema.file or self.dataset


def find_config_path(cli_path: str | None) -> Path:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line.

    Returns:
        The resolved Path object (not necessarily existing).
    """

    if cli_path:
        return Path(cli_path)

    return Path.cwd() / DEFAULT_CONFIG_NAME


def _dataset_override(cli_dataset: str | None) -> str | None:
    if cli_dataset and cli_dataset.strip():
        return cli_dataset.strip()

    env_value = os.getenv(DATASET_ENV_VAR, "").strip()
    return env_value or None


def default_config(dataset: str | Path, *, base_dir: Path | None = None) -> SurveyConfig:
    """
    Build a configuration with default settings for a dataset file.

    Args:
        dataset:
            Dataset path. Relative paths are resolved against `base_dir`.
        base_dir:
            Directory for relative paths (default: current directory).

    Returns:
        A SurveyConfig instance.
    """

    base = (base_dir or Path.cwd()).resolve()
    return SurveyConfig(
        config_path=None,
        base_dir=base,
        dataset=(base / Path(dataset)).resolve(),
    )


def load_config(path: Path, *, dataset: str | None = None) -> SurveyConfig:
    """
    Load and validate a `survey.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.
        dataset:
            Optional dataset path from the command line. Overrides the
            environment and the config file.

    Returns:
        A validated SurveyConfig instance.

    Raises:
        ConfigError:
            If the file is missing (and no dataset override exists),
            unreadable, cannot be parsed as YAML, or has invalid keys.
    """

    override = _dataset_override(dataset)

    if not path.exists():
        if override:
            return default_config(override)
        raise ConfigError(
            f"No {DEFAULT_CONFIG_NAME} found in current directory and no --config provided. "
            "Use the 'template' command to create one, pass --config PATH or --dataset PATH."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    dataset_value = override or raw.get("dataset")
    if not isinstance(dataset_value, str) or not dataset_value.strip():
        raise ConfigError(
            f"'dataset' must be a non-empty string (or set {DATASET_ENV_VAR} / pass --dataset)"
        )

    responses_sheet = _parse_sheet_ref(raw.get("responses_sheet", 0), key="responses_sheet")
    max_rows = _parse_max_rows(raw.get("max_rows"))

    # Interpret dataset paths relative to the config file location.
    base_dir = path.parent.resolve()
    schema = _parse_schema(raw.get("schema"), base_dir=base_dir)
    display = _parse_display(raw.get("display"))

    return SurveyConfig(
        config_path=path.resolve(),
        base_dir=base_dir,
        dataset=(base_dir / dataset_value.strip()).resolve(),
        responses_sheet=responses_sheet,
        max_rows=max_rows,
        schema=schema,
        display=display,
    )


def _parse_sheet_ref(value: Any, *, key: str) -> SheetRef:
    """
    Validate a sheet reference (0-based index or sheet name).

    Raises:
        ConfigError:
            If the value is neither a non-negative integer nor a non-empty string.
    """

    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a sheet index or name")
    if isinstance(value, int):
        if value < 0:
            raise ConfigError(f"{key} must be >= 0")
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()

    raise ConfigError(f"{key} must be a sheet index or name")


def _parse_max_rows(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("max_rows must be an integer if provided")
    if value <= 0:
        raise ConfigError("max_rows must be > 0")
    return value


def _optional_column(value: Any, *, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key} must be a non-empty string if provided")
    return value.strip()


def _parse_schema(value: Any, *, base_dir: Path) -> SchemaConfig:
    """
    Parse and validate the optional `schema` section.

    Args:
        value:
            Raw YAML value for the `schema` key.
        base_dir:
            Directory relative schema file paths are resolved against.

    Returns:
        A SchemaConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return SchemaConfig()

    if not isinstance(value, dict):
        raise ConfigError("'schema' must be a mapping if provided")

    file_value = value.get("file")
    schema_file: Path | None = None
    if file_value is not None:
        if not isinstance(file_value, str) or not file_value.strip():
            raise ConfigError("schema.file must be a non-empty string if provided")
        schema_file = (base_dir / file_value.strip()).resolve()

    return SchemaConfig(
        file=schema_file,
        sheet=_parse_sheet_ref(value.get("sheet", SchemaConfig.sheet), key="schema.sheet"),
        id_column=_optional_column(value.get("id_column"), key="schema.id_column"),
        text_column=_optional_column(value.get("text_column"), key="schema.text_column"),
        key_column=_optional_column(value.get("key_column"), key="schema.key_column"),
    )


def _parse_display(value: Any) -> DisplayConfig:
    """
    Parse and validate the optional `display` section.

    Args:
        value:
            Raw YAML value for the `display` key.

    Returns:
        A DisplayConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return DisplayConfig()

    if not isinstance(value, dict):
        raise ConfigError("'display' must be a mapping if provided")

    parsed: dict[str, int] = {}
    for key in ("per_page", "preview_limit", "preview_columns", "truncate_length", "label_length"):
        item = value.get(key, getattr(DisplayConfig, key))
        if isinstance(item, bool) or not isinstance(item, int):
            raise ConfigError(f"display.{key} must be an integer")
        if item <= 0:
            raise ConfigError(f"display.{key} must be > 0")
        parsed[key] = item

    return DisplayConfig(**parsed)
