"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from typing import Any, Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from .exceptions import UserAbort, ValidationError


def _ensure_tty() -> None:
    # stdout is captured by the shell wrapper, so prompts would be invisible.
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise ValidationError(
            "Interactive mode requires a TTY. Provide the worktree name to run non-interactively."
        )


def fuzzy_select(message: str, choices: Sequence[Choice | str]) -> Any:
    _ensure_tty()
    try:
        return inquirer.fuzzy(message=message, choices=choices).execute()
    except KeyboardInterrupt as exc:
        raise UserAbort("Selection cancelled.") from exc
