# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Survey dataset access.

A survey export consists of a response sheet (one row per respondent, one
column per question) and a schema sheet (one row per question). Both are read
through the spreadsheet readers in `survey_explorer.sheets`:

- The first row of a sheet is the header row. Columns without a header are
  ignored.
- Rows without any non-empty cell are skipped.
- Cell values are normalized to text. Empty cells become None ("no answer").

The schema and the responses are loaded once and cached for the lifetime of
the dataset object. `iter_responses()` streams rows without caching them.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from survey_explorer.config import SurveyConfig
from survey_explorer.errors import DatasetError
from survey_explorer.sheets.base import SheetRef
from survey_explorer.sheets.registry import iter_sheet_rows, list_sheet_names


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionDescriptor:
    """
    One question of the survey schema.

    Attributes:
        identifier:
            Question code.
        label:
            Human-readable question text (may be empty).
        raw_column_key:
            Key of the question's answer inside a respondent record.
        attributes:
            The complete schema row (header -> cell text).
    """

    identifier: str
    label: str = ""
    raw_column_key: str = ""
    attributes: dict[str, str | None] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.raw_column_key:
            object.__setattr__(self, "raw_column_key", self.identifier)


def cell_text(value: Any) -> str | None:
    """
    Normalize a raw spreadsheet cell to text.

    Returns:
        None for empty cells, otherwise the text of the value. Integral
        floats lose their `.0` so numeric codes read like in the sheet.
    """

    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def iter_records(rows: Iterator[list[Any]], *, limit: int | None = None) -> Iterator[dict[str, str | None]]:
    """
    Turn raw sheet rows into records keyed by the header row.

    Args:
        rows:
            Raw rows, header first.
        limit:
            Optional maximum number of records to produce.

    Yields:
        One mapping per non-empty data row.
    """

    if limit is not None and limit <= 0:
        return

    headers: list[tuple[int, str]] | None = None
    produced = 0

    for row in rows:
        if headers is None:
            headers = []
            for idx, value in enumerate(row):
                text = cell_text(value)
                if text is not None:
                    headers.append((idx, text.strip()))
            if not headers:
                return
            continue

        record: dict[str, str | None] = {}
        has_data = False
        for idx, header in headers:
            value = cell_text(row[idx]) if idx < len(row) else None
            record[header] = value
            if value is not None:
                has_data = True

        if not has_data:
            continue

        yield record
        produced += 1
        if limit is not None and produced >= limit:
            return


def detect_schema_columns(headers: list[str]) -> tuple[str, str | None]:
    """
    Guess the identifier and text columns of a schema sheet.

    The last header containing "id" is the identifier column and the last
    header containing "text" is the label column (both case-insensitive). If
    either cannot be found, the first two columns are used instead.

    Returns:
        Tuple of (identifier column, text column or None for single-column
        schemas).

    Raises:
        DatasetError:
            If there are no headers at all.
    """

    if not headers:
        raise DatasetError("Schema sheet has no header row")

    id_column: str | None = None
    text_column: str | None = None
    for header in headers:
        lowered = header.lower()
        if "id" in lowered:
            id_column = header
        if "text" in lowered:
            text_column = header

    if id_column is None or text_column is None:
        id_column = headers[0]
        text_column = headers[1] if len(headers) > 1 else None

    return id_column, text_column


class SurveyDataset:
    """
    Read-only access to one survey dataset.

    Args:
        config:
            Session configuration naming the dataset and schema sheets.
    """

    def __init__(self, config: SurveyConfig) -> None:
        self.config = config
        self._schema_rows: list[dict[str, str | None]] | None = None
        self._schema: list[QuestionDescriptor] | None = None
        self._by_id: dict[str, QuestionDescriptor] = {}
        self._responses: list[dict[str, str | None]] | None = None

    @property
    def path(self) -> Path:
        return self.config.dataset

    def _check_file(self, path: Path) -> None:
        if not path.exists():
            raise DatasetError(f"Survey file not found: {path}")
        if not path.is_file():
            raise DatasetError(f"Survey path is not a file: {path}")

    def _read_sheet(self, path: Path, sheet: SheetRef, *, limit: int | None = None) -> Iterator[dict[str, str | None]]:
        self._check_file(path)
        logger.info("Reading sheet %r from %s", sheet, path)
        return iter_records(iter_sheet_rows(path, sheet), limit=limit)

    def sheet_names(self) -> list[str]:
        """Return the sheet names of the dataset file."""

        self._check_file(self.path)
        names = list_sheet_names(self.path)
        logger.info("Available worksheets: %s", ", ".join(names))
        return names

    def schema_rows(self) -> list[dict[str, str | None]]:
        """
        Return the raw rows of the schema sheet.

        Raises:
            DatasetError:
                If the schema file cannot be read.
        """

        if self._schema_rows is None:
            rows = list(self._read_sheet(self.config.schema_file, self.config.schema.sheet))
            logger.info("Loaded %d schema rows", len(rows))
            self._schema_rows = rows
        return self._schema_rows

    def schema(self) -> list[QuestionDescriptor]:
        """
        Return the question schema in sheet order.

        Rows without an identifier are skipped. Duplicate identifiers are
        kept in the list, but `question()` resolves to the first one.

        Raises:
            DatasetError:
                If the schema file cannot be read or configured columns do
                not exist.
        """

        if self._schema is not None:
            return self._schema

        rows = self.schema_rows()
        if not rows:
            self._schema = []
            return self._schema

        headers = list(rows[0].keys())
        id_column, text_column = self._schema_columns(headers)
        key_column = self.config.schema.key_column
        if key_column is not None and key_column not in headers:
            raise DatasetError(f"Schema key column not found: {key_column}")

        questions: list[QuestionDescriptor] = []
        by_id: dict[str, QuestionDescriptor] = {}
        duplicates: set[str] = set()

        for row in rows:
            identifier = (row.get(id_column) or "").strip()
            if not identifier:
                continue

            label = (row.get(text_column) or "").strip() if text_column else ""
            raw_key = (row.get(key_column) or "").strip() if key_column else ""

            question = QuestionDescriptor(
                identifier=identifier,
                label=label,
                raw_column_key=raw_key,
                attributes=dict(row),
            )
            questions.append(question)

            if identifier in by_id:
                if identifier not in duplicates:
                    logger.warning("Duplicate question identifier %r in schema; keeping the first", identifier)
                    duplicates.add(identifier)
                continue
            by_id[identifier] = question

        self._schema = questions
        self._by_id = by_id
        return self._schema

    def _schema_columns(self, headers: list[str]) -> tuple[str, str | None]:
        configured = self.config.schema
        detected_id, detected_text = detect_schema_columns(headers)

        id_column = configured.id_column or detected_id
        text_column = configured.text_column or detected_text

        for column in (id_column, text_column):
            if column is not None and column not in headers:
                raise DatasetError(f"Schema column not found: {column}")

        logger.debug("Schema columns: id=%r text=%r", id_column, text_column)
        return id_column, text_column

    def question(self, identifier: str) -> QuestionDescriptor | None:
        """Look up a question by identifier (first occurrence wins)."""

        self.schema()
        return self._by_id.get(identifier)

    def iter_responses(self) -> Iterator[dict[str, str | None]]:
        """
        Stream the respondent records in file order.

        The stream is not cached. Call again to start over.

        Raises:
            DatasetError:
                If the dataset cannot be read.
        """

        return self._read_sheet(self.path, self.config.responses_sheet, limit=self.config.max_rows)

    def responses(self) -> list[dict[str, str | None]]:
        """
        Return all respondent records (loaded once, then cached).

        Raises:
            DatasetError:
                If the dataset cannot be read.
        """

        if self._responses is None:
            records = list(self.iter_responses())
            logger.info("Processed %d data rows", len(records))
            self._responses = records
        return self._responses
