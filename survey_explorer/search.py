# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Keyword search over the question schema."""

from typing import Iterable

from survey_explorer.dataset import QuestionDescriptor


def question_matches(question: QuestionDescriptor, term: str) -> bool:
    """Return True if any text of the question contains `term` (case-insensitive)."""

    needle = term.casefold()
    if needle in question.identifier.casefold():
        return True
    if needle in question.label.casefold():
        return True

    for value in question.attributes.values():
        if isinstance(value, str) and needle in value.casefold():
            return True

    return False


def search_questions(schema: Iterable[QuestionDescriptor], term: str) -> list[QuestionDescriptor]:
    """
    Find questions mentioning a search term.

    Identifier, label and every other schema column (answer type, option
    lists, ...) are searched.

    Args:
        schema:
            Questions in schema order.
        term:
            Search term. Surrounding whitespace is ignored.

    Returns:
        Matching questions in schema order. Empty for a blank term.
    """

    needle = term.strip()
    if not needle:
        return []

    return [q for q in schema if question_matches(q, needle)]
