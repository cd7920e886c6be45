# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Spreadsheet reader registry."""

from pathlib import Path
from typing import Any, Iterator

from survey_explorer.errors import DatasetError
from survey_explorer.sheets.base import ReaderError, SheetReader, SheetRef
from survey_explorer.sheets.csv_reader import CsvSheetReader
from survey_explorer.sheets.ods_reader import OdsSheetReader
from survey_explorer.sheets.xlsx_reader import XlsxSheetReader


_READERS: list[SheetReader] = [
    XlsxSheetReader(),
    OdsSheetReader(),
    CsvSheetReader(),
]


def get_sheet_reader(path: Path) -> SheetReader:
    """Select a spreadsheet reader based on the file.

    Args:
        path:
            Spreadsheet file path.

    Returns:
        A reader instance.

    Raises:
        DatasetError:
            If no reader supports the file.
    """

    for reader in _READERS:
        if reader.can_read(path):
            return reader

    supported = ", ".join(sorted({".xlsx", ".xlsm", ".ods", ".csv"}))
    raise DatasetError(f"Unsupported spreadsheet format: {path} (supported: {supported})")


def list_sheet_names(path: Path) -> list[str]:
    """Return the sheet names of a spreadsheet and normalize errors to DatasetError."""

    reader = get_sheet_reader(path)
    try:
        return reader.sheet_names(path)
    except ReaderError as exc:
        raise DatasetError(str(exc)) from exc


def iter_sheet_rows(path: Path, sheet: SheetRef) -> Iterator[list[Any]]:
    """Lazily read the rows of one sheet and normalize errors to DatasetError."""

    reader = get_sheet_reader(path)
    try:
        yield from reader.iter_rows(path, sheet)
    except ReaderError as exc:
        raise DatasetError(str(exc)) from exc
