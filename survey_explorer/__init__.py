"""
Survey explorer CLI package.

This package contains a small CLI tool for exploring one survey dataset
distributed as a spreadsheet:
- listing the question schema,
- searching questions and options by keyword,
- building subsets of respondents matching a question/answer selection.
"""

from __future__ import annotations
