"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: Path
    branch: str = ""
    commit: str = ""
    is_bare: bool = False
    locked: bool = False
    prunable: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_detached(self) -> bool:
        return not self.is_bare and not self.branch

    @property
    def short_commit(self) -> str:
        return self.commit[:7]

    @property
    def status(self) -> str:
        if self.locked:
            return "locked"
        if self.prunable:
            return "prunable"
        return "active"

    @property
    def display_name(self) -> str:
        if self.is_bare:
            return f"{self.name} (bare)"
        branch = self.branch or "(detached)"
        return f"{self.name} ({branch})"
