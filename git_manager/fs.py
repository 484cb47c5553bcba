"""Filesystem helpers for git-manager."""

from __future__ import annotations

import re
from pathlib import Path

from .exceptions import ValidationError

_URL_SEPARATORS = re.compile(r"[/:\\]")


def repo_name_from_url(url: str) -> str:
    """Derive the workspace directory name from a clone URL."""

    name = _URL_SEPARATORS.split(url.strip().rstrip("/"))[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise ValidationError(f"Cannot derive a repository name from URL: {url}")
    return name


def worktree_target(git_dir: Path, name: str) -> Path:
    """Worktrees live beside the git directory, named after the worktree."""

    if not name.strip():
        raise ValidationError("Worktree name cannot be empty.")
    if "\0" in name:
        raise ValidationError("Worktree name cannot contain null characters.")
    return git_dir.parent / name


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)
