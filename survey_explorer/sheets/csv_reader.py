# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""CSV reader.

A CSV file holds exactly one sheet, named after the file stem. Empty cells are
returned as None so they behave like empty spreadsheet cells.
"""

import csv
from pathlib import Path
from typing import Any, Iterator

from survey_explorer.sheets.base import ReaderError, SheetRef, resolve_sheet_name


class CsvSheetReader:
    """Read comma-separated files."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".csv"

    def sheet_names(self, path: Path) -> list[str]:
        return [path.stem]

    def iter_rows(self, path: Path, sheet: SheetRef) -> Iterator[list[Any]]:
        resolve_sheet_name(self.sheet_names(path), sheet, path=path)

        try:
            # utf-8-sig strips the BOM Excel writes into CSV exports.
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                for row in csv.reader(handle):
                    yield [cell if cell != "" else None for cell in row]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise ReaderError(f"Failed to read CSV file: {exc}", path=path) from exc
