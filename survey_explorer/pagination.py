# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Page slicing for long result tables."""

import math
from dataclasses import dataclass
from typing import Any, Sequence


DEFAULT_PER_PAGE = 20


@dataclass(frozen=True)
class Page:
    """
    One page of a sequence.

    Attributes:
        number:
            1-based page number.
        total_pages:
            Number of pages (at least 1).
        total_items:
            Length of the paginated sequence.
        items:
            Items on this page.
    """

    number: int
    total_pages: int
    total_items: int
    items: list[Any]

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def page_count(total_items: int, per_page: int) -> int:
    """Number of pages needed for `total_items` (never less than one)."""

    return max(1, math.ceil(total_items / per_page))


def paginate(items: Sequence[Any], page: int, per_page: int = DEFAULT_PER_PAGE) -> Page:
    """
    Slice a sequence into a page.

    Args:
        items:
            Items to paginate.
        page:
            Requested 1-based page. Clamped into the valid range.
        per_page:
            Items per page.

    Returns:
        The selected page.

    Raises:
        ValueError:
            If `per_page` is smaller than 1.
    """

    if per_page < 1:
        raise ValueError("per_page must be >= 1")

    total_pages = page_count(len(items), per_page)
    number = min(max(1, page), total_pages)
    offset = (number - 1) * per_page

    return Page(
        number=number,
        total_pages=total_pages,
        total_items=len(items),
        items=list(items[offset : offset + per_page]),
    )
