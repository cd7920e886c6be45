"""Spreadsheet reading.

The dataset layer can read survey exports from different spreadsheet formats.
Each reader turns one sheet into a lazy sequence of rows, where every row is a
list of raw cell values (header row included).

Interpreting headers and cell values is handled elsewhere.
"""

from survey_explorer.sheets.base import SheetReader
from survey_explorer.sheets.registry import get_sheet_reader

__all__ = [
    "SheetReader",
    "get_sheet_reader",
]
