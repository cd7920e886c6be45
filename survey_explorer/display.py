# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Terminal rendering of tables and paged results."""

from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.table import Table

from survey_explorer.cli_io import is_interactive_tty, prompt_choice, prompt_text
from survey_explorer.pagination import Page, paginate


console = Console(highlight=False)


def shorten(text: str, length: int) -> str:
    """Cut text to `length` characters, marking the cut with "..."."""

    if len(text) <= length:
        return text
    return text[:length] + "..."


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def render_table(
    headers: Sequence[str],
    rows: Sequence[Mapping[str, Any]],
    *,
    title: str | None = None,
) -> None:
    """
    Print rows as a table.

    Args:
        headers:
            Columns to show, in order. Missing keys render as empty cells.
        rows:
            Row mappings.
        title:
            Optional table title.
    """

    table = Table(title=title, show_lines=False)
    for header in headers:
        table.add_column(str(header), overflow="fold")
    for row in rows:
        table.add_row(*(_cell(row.get(h)) for h in headers))

    console.print(table)


def table_headers(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    """Headers of a result table, taken from the first row."""

    if not rows:
        return []
    return list(rows[0].keys())


def render_page(rows: Sequence[Mapping[str, Any]], page: int, per_page: int) -> Page:
    """Print one page of rows plus a page footer and return the page shown."""

    current = paginate(rows, page, per_page)
    render_table(table_headers(rows), current.items)
    print(
        f"Page {current.number} of {current.total_pages} "
        f"(showing {len(current.items)} of {current.total_items} items)"
    )
    return current


def browse_pages(rows: Sequence[Mapping[str, Any]], *, page: int = 1, per_page: int = 20) -> None:
    """
    Show rows page by page.

    In an interactive terminal the user can move between pages until choosing
    to go back. Otherwise only the requested page is printed.
    """

    current = render_page(rows, page, per_page)
    if current.total_pages <= 1 or not is_interactive_tty():
        return

    while True:
        choices: list[tuple[str, str]] = []
        if current.has_previous:
            choices.append(("previous", "Previous page"))
        if current.has_next:
            choices.append(("next", "Next page"))
        choices.append(("goto", "Go to specific page"))
        choices.append(("exit", "Return"))

        choice = prompt_choice("Navigation", choices, default="next" if current.has_next else "exit")

        if choice == "previous":
            current = render_page(rows, current.number - 1, per_page)
        elif choice == "next":
            current = render_page(rows, current.number + 1, per_page)
        elif choice == "goto":
            target = _prompt_page_number(current)
            if target != current.number:
                current = render_page(rows, target, per_page)
        else:
            return


def _prompt_page_number(current: Page) -> int:
    while True:
        answer = prompt_text(f"Enter page number (1-{current.total_pages})", default=str(current.number))
        if answer.isdigit() and 1 <= int(answer) <= current.total_pages:
            return int(answer)
        print(f"Please enter a valid page number between 1 and {current.total_pages}")
