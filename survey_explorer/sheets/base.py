# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Spreadsheet reader interface."""

from pathlib import Path
from typing import Any, Iterator, Protocol


# A sheet is addressed either by its 0-based position or by its name.
SheetRef = int | str


class SheetReader(Protocol):
    """Interface for spreadsheet file reading.

    Implementations only extract raw cell values row by row. Header handling
    and value normalization happen in the dataset layer.
    """

    def can_read(self, path: Path) -> bool:
        """Return True if this reader supports the given file."""

        raise NotImplementedError

    def sheet_names(self, path: Path) -> list[str]:
        """Return the sheet names of the file in workbook order."""

        raise NotImplementedError

    def iter_rows(self, path: Path, sheet: SheetRef) -> Iterator[list[Any]]:
        """Lazily yield the rows of one sheet as lists of raw cell values."""

        raise NotImplementedError


class ReaderError(RuntimeError):
    """Raised for spreadsheet reading errors."""

    def __init__(self, message: str, *, path: Path | None = None, sheet: SheetRef | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.sheet = sheet

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        if self.sheet is not None:
            return f"{self.path} [sheet {self.sheet!r}]: {self.message}"
        return f"{self.path}: {self.message}"


def resolve_sheet_name(names: list[str], sheet: SheetRef, *, path: Path) -> str:
    """Map a sheet index or name onto an existing sheet name.

    Raises:
        ReaderError:
            If the sheet does not exist.
    """

    if isinstance(sheet, int):
        if 0 <= sheet < len(names):
            return names[sheet]
        raise ReaderError(
            f"Sheet index out of range (file has {len(names)} sheet(s))",
            path=path,
            sheet=sheet,
        )

    if sheet in names:
        return sheet

    raise ReaderError(f"No such sheet (available: {', '.join(names) or '-'})", path=path, sheet=sheet)
