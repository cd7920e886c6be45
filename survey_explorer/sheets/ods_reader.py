# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODS reader."""

from pathlib import Path
from typing import Any, Iterator

from odfdo import Document

from survey_explorer.sheets.base import ReaderError, SheetRef, resolve_sheet_name


class OdsSheetReader:
    """Read OpenDocument spreadsheets."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".ods"

    def _open(self, path: Path) -> Document:
        try:
            return Document(path)
        except Exception as exc:  # noqa: BLE001
            raise ReaderError(f"Failed to open ODS file: {exc}", path=path) from exc

    def sheet_names(self, path: Path) -> list[str]:
        doc = self._open(path)
        return [str(t.name) for t in doc.body.tables]

    def iter_rows(self, path: Path, sheet: SheetRef) -> Iterator[list[Any]]:
        doc = self._open(path)
        tables = list(doc.body.tables)
        name = resolve_sheet_name([str(t.name) for t in tables], sheet, path=path)
        table = next(t for t in tables if str(t.name) == name)

        try:
            # Calc pads sheets with huge repeated empty rows/columns; drop them
            # before expanding the table into plain values.
            table.rstrip()
            values = table.get_values()
        except Exception as exc:  # noqa: BLE001
            raise ReaderError(f"Failed to read rows: {exc}", path=path, sheet=sheet) from exc

        for row in values:
            yield list(row)
