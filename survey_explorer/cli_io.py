# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Small CLI interaction helpers.

These helpers centralize terminal interaction behavior so actions can stay
focused on their core job.

The project uses a safety-first approach:
- In interactive terminals, actions may prompt the user for choices.
- In non-interactive contexts (CI, pipes), actions must not prompt and
  instead require the choices as command-line options.
"""

import sys
from pathlib import Path
from typing import Sequence


# (key, text) pairs offered in a numbered menu.
Choice = tuple[str, str]


def is_interactive_tty() -> bool:
    """
    Determine whether we can safely prompt the user.

    Returns:
        True if both stdin and stdout are connected to a TTY.
    """

    try:
        return sys.stdin.isatty() and sys.stdout.isatty()
    except Exception:  # noqa: BLE001
        return False


def _require_tty() -> None:
    if not is_interactive_tty():
        raise RuntimeError("Cannot prompt in non-interactive mode")


def prompt_yes_no(question: str, *, default_no: bool = True) -> bool:
    """
    Ask the user a yes/no question.

    Args:
        question:
            Prompt text without the trailing choice suffix.
        default_no:
            If true, empty input is treated as "no".

    Returns:
        True if the user answered yes.

    Raises:
        RuntimeError:
            If the prompt cannot be shown in a non-interactive session.
    """

    _require_tty()

    suffix = "[y/N]" if default_no else "[Y/n]"
    while True:
        answer = input(f"{question} {suffix} ").strip().lower()
        if not answer:
            return not default_no
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False


def prompt_overwrite(path: Path) -> bool:
    """
    Ask the user whether to overwrite an existing file.

    Raises:
        RuntimeError:
            If the prompt cannot be shown in a non-interactive session.
    """

    return prompt_yes_no(f"File already exists: {path}. Overwrite?", default_no=True)


def prompt_text(label: str, *, default: str | None = None, required: bool = True) -> str:
    """
    Ask the user for a line of text.

    Args:
        label:
            Prompt text.
        default:
            Value used for empty input.
        required:
            If true, keep asking until a non-empty answer is given.

    Returns:
        The stripped answer.

    Raises:
        RuntimeError:
            If the prompt cannot be shown in a non-interactive session.
    """

    _require_tty()

    suffix = f" [{default}]" if default else ""
    while True:
        answer = input(f"{label}{suffix}: ").strip()
        if not answer and default is not None:
            return default
        if answer or not required:
            return answer
        print("A value is required.")


def _print_choices(label: str, choices: Sequence[Choice]) -> None:
    print(label)
    width = len(str(len(choices)))
    for idx, (_, text) in enumerate(choices, start=1):
        print(f"  {idx:>{width}}) {text}")


def _resolve_choice(answer: str, choices: Sequence[Choice]) -> str | None:
    """Map a menu answer (number or exact key) onto a choice key."""

    if answer.isdigit():
        idx = int(answer)
        if 1 <= idx <= len(choices):
            return choices[idx - 1][0]
        return None

    for key, _ in choices:
        if key == answer:
            return key
    return None


def prompt_choice(label: str, choices: Sequence[Choice], *, default: str | None = None) -> str:
    """
    Let the user pick one entry of a numbered menu.

    The answer may be the entry number or its key.

    Args:
        label:
            Menu title.
        choices:
            Menu entries as (key, text) pairs.
        default:
            Key returned for empty input.

    Returns:
        The key of the selected entry.

    Raises:
        RuntimeError:
            If the prompt cannot be shown in a non-interactive session.
        ValueError:
            If there is nothing to choose from.
    """

    if not choices:
        raise ValueError("No choices to select from")
    _require_tty()

    _print_choices(label, choices)
    suffix = f" [{default}]" if default else ""
    while True:
        answer = input(f"Select 1-{len(choices)}{suffix}: ").strip()
        if not answer and default is not None:
            return default
        key = _resolve_choice(answer, choices)
        if key is not None:
            return key
        print(f"Please enter a number between 1 and {len(choices)}.")


def prompt_multi_choice(label: str, choices: Sequence[Choice]) -> list[str]:
    """
    Let the user pick one or more entries of a numbered menu.

    Entries are separated by commas or spaces and may be numbers or keys
    without spaces. At least one entry is required.

    Returns:
        Keys of the selected entries in menu order, without duplicates.

    Raises:
        RuntimeError:
            If the prompt cannot be shown in a non-interactive session.
        ValueError:
            If there is nothing to choose from.
    """

    if not choices:
        raise ValueError("No choices to select from")
    _require_tty()

    _print_choices(label, choices)
    while True:
        answer = input("Select one or more (e.g. 1,3): ").replace(",", " ").split()
        selected: set[str] = set()
        invalid: list[str] = []
        for token in answer:
            key = _resolve_choice(token, choices)
            if key is None:
                invalid.append(token)
            else:
                selected.add(key)

        if invalid:
            print(f"Invalid selection: {', '.join(invalid)}")
            continue
        if not selected:
            print("Select at least one entry.")
            continue

        return [key for key, _ in choices if key in selected]
