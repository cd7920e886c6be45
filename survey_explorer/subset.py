# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Respondent subset engine.

Pure functions over respondent records (flat mappings from question id to raw
answer text). Nothing in here performs I/O, logs or raises for any record
shape: a missing question simply means "no answer".

Multi-select answers are stored as a single cell with `;` separated values.
Distinct values split on that delimiter, while matching deliberately runs a
case-insensitive substring test against the whole raw cell.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence


MULTI_SELECT_DELIMITER = ";"

DEFAULT_PREVIEW_LIMIT = 5
DEFAULT_TRUNCATE_LENGTH = 50


Record = Mapping[str, Any]


@dataclass(frozen=True)
class Subset:
    """
    Respondents matching a question/value selection.

    Attributes:
        question_id:
            Question the subset was built for.
        targets:
            Target values (OR semantics).
        records:
            Matching records in original dataset order.
    """

    question_id: str
    targets: tuple[str, ...]
    records: tuple[Record, ...] = field(default_factory=tuple)

    @property
    def match_count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)


@dataclass(frozen=True)
class SubsetSummary:
    """
    Display-ready summary of a subset.

    Attributes:
        match_count:
            Number of matching respondents.
        preview:
            First records of the subset with long strings cut to the
            configured display length.
    """

    match_count: int
    preview: list[dict[str, Any]]


def lookup_answer(record: Record, question_id: str) -> str | None:
    """
    Look up the raw answer of a record.

    The exact key wins, even when its cell is empty. Only a record without
    that key falls back to the lowercase form of the key.

    Args:
        record:
            Respondent record.
        question_id:
            Question identifier (column key).

    Returns:
        The raw answer text, or None if the record has no answer.
    """

    if question_id in record:
        value = record[question_id]
    else:
        value = record.get(question_id.lower())

    if value is None:
        return None

    return value if isinstance(value, str) else str(value)


def split_answer(answer: str) -> list[str]:
    """Split a multi-select cell into trimmed, non-empty parts."""

    parts = (p.strip() for p in answer.split(MULTI_SELECT_DELIMITER))
    return [p for p in parts if p]


def distinct_values(records: Iterable[Record], question_id: str) -> list[str]:
    """
    Collect the distinct answer values observed for a question.

    Args:
        records:
            Respondent records. Any iterable works; it is consumed once.
        question_id:
            Question identifier.

    Returns:
        Distinct non-empty values, sorted ascending. Empty if no record
        answers the question.
    """

    seen: set[str] = set()
    for record in records:
        answer = lookup_answer(record, question_id)
        if answer is None:
            continue
        seen.update(split_answer(answer))

    return sorted(seen)


def _normalize_targets(targets: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(targets, str):
        return (targets,)
    return tuple(str(t) for t in targets)


def matches(record: Record, question_id: str, targets: str | Sequence[str]) -> bool:
    """
    Check whether a record answers a question with any of the target values.

    Each target is tested as a case-insensitive substring of the whole raw
    cell. "Java" therefore also matches "JavaScript".

    Args:
        record:
            Respondent record.
        question_id:
            Question identifier.
        targets:
            A single target value or a sequence of them (OR semantics).

    Returns:
        True if at least one target is contained in the answer.
    """

    answer = lookup_answer(record, question_id)
    if answer is None:
        return False

    haystack = answer.lower()
    return any(t.lower() in haystack for t in _normalize_targets(targets))


def build_subset(
    records: Iterable[Record],
    question_id: str,
    targets: str | Sequence[str],
) -> Subset:
    """
    Filter records down to those matching a question/value selection.

    An empty input and a selection nobody matches both give an empty subset.
    Callers that need to tell these apart must check the input themselves.

    Args:
        records:
            Respondent records in dataset order.
        question_id:
            Question identifier.
        targets:
            A single target value or a sequence of them (OR semantics).

    Returns:
        The resulting subset.
    """

    normalized = _normalize_targets(targets)
    matching = tuple(r for r in records if matches(r, question_id, normalized))
    return Subset(question_id=question_id, targets=normalized, records=matching)


def truncate_text(value: Any, length: int) -> Any:
    """Cut strings to `length` characters. Other values pass through."""

    if isinstance(value, str) and length >= 0:
        return value[:length]
    return value


def summarize_subset(
    subset: Subset,
    *,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    truncate_length: int = DEFAULT_TRUNCATE_LENGTH,
) -> SubsetSummary:
    """
    Build the count and a truncated preview for a subset.

    Args:
        subset:
            Subset to summarize. It is not modified.
        preview_limit:
            Maximum number of preview rows.
        truncate_length:
            Maximum length of string values in preview rows (hard cut, no
            ellipsis).

    Returns:
        The summary.
    """

    limit = max(0, min(preview_limit, subset.match_count))
    preview = [
        {key: truncate_text(value, truncate_length) for key, value in record.items()}
        for record in subset.records[:limit]
    ]
    return SubsetSummary(match_count=subset.match_count, preview=preview)
