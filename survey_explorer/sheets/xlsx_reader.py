# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""XLSX reader.

Uses openpyxl in read-only mode so large survey exports are streamed row by
row instead of being loaded into memory at once.
"""

from pathlib import Path
from typing import Any, Iterator

from openpyxl import load_workbook

from survey_explorer.sheets.base import ReaderError, SheetRef, resolve_sheet_name


class XlsxSheetReader:
    """Read Excel workbooks."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in {".xlsx", ".xlsm"}

    def sheet_names(self, path: Path) -> list[str]:
        try:
            wb = load_workbook(path, read_only=True, data_only=True)
        except Exception as exc:  # noqa: BLE001
            raise ReaderError(f"Failed to open workbook: {exc}", path=path) from exc

        try:
            return list(wb.sheetnames)
        finally:
            wb.close()

    def iter_rows(self, path: Path, sheet: SheetRef) -> Iterator[list[Any]]:
        try:
            wb = load_workbook(path, read_only=True, data_only=True)
        except Exception as exc:  # noqa: BLE001
            raise ReaderError(f"Failed to open workbook: {exc}", path=path) from exc

        try:
            name = resolve_sheet_name(list(wb.sheetnames), sheet, path=path)
            ws = wb[name]
            try:
                for row in ws.iter_rows(values_only=True):
                    yield list(row)
            except Exception as exc:  # noqa: BLE001
                raise ReaderError(f"Failed to read rows: {exc}", path=path, sheet=sheet) from exc
        finally:
            wb.close()
