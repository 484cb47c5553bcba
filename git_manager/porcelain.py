"""Parser for `git worktree list --porcelain` output."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .models import WorktreeRecord


def parse_worktree_porcelain(text: str) -> list[WorktreeRecord]:
    """Turn porcelain listing text into records, in the order git emitted them.

    Unknown attribute lines and anything before the first `worktree` line are
    ignored, so this never raises on odd input.
    """

    records: list[WorktreeRecord] = []
    current: dict[str, Any] | None = None
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            if current is not None:
                records.append(WorktreeRecord(**current))
                current = None
            continue
        if line.startswith("worktree "):
            if current is not None:
                records.append(WorktreeRecord(**current))
            current = {"path": Path(line[len("worktree "):])}
        elif current is None:
            continue
        elif line.startswith("branch "):
            current["branch"] = line[len("branch "):].split("/")[-1]
        elif line.startswith("HEAD "):
            current["commit"] = line[len("HEAD "):]
        elif line.startswith("bare"):
            current["is_bare"] = True
        elif line.startswith("locked"):
            current["locked"] = True
        elif line.startswith("prunable"):
            current["prunable"] = True
    if current is not None:
        records.append(WorktreeRecord(**current))
    return records
