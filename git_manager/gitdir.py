"""Locate the `.git` directory governing a working directory."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .exceptions import FilesystemError, GitDirParseError, NotARepositoryError

GITDIR_PREFIX = "gitdir: "

logger = logging.getLogger(__name__)


def find_git_dir(start: Path) -> Path:
    """Return the absolute path of the repository's `.git` directory.

    A `.git` directory in `start` wins outright. A `.git` file marks a linked
    worktree: its `gitdir:` target is `<git dir>/worktrees/<name>`, so the shared
    git directory is two levels above it. Otherwise ancestors are searched for
    a `.git` directory up to the filesystem root.
    """

    # Lexical only: `..` must not leave stale ancestors, symlinks stay as given.
    start = Path(os.path.normpath(Path(start).absolute()))
    candidate = start / ".git"
    mode = _stat_mode(candidate)
    if mode is not None:
        if stat.S_ISDIR(mode):
            logger.debug("Found git directory %s", candidate)
            return candidate
        if stat.S_ISREG(mode):
            worktree_admin = _read_gitdir_file(candidate)
            logger.debug("Resolved worktree gitdir reference %s", worktree_admin)
            return worktree_admin.parent.parent
        logger.debug("Ignoring %s: neither a directory nor a regular file", candidate)

    for parent in start.parents:
        candidate = parent / ".git"
        mode = _stat_mode(candidate)
        if mode is not None and stat.S_ISDIR(mode):
            logger.debug("Found git directory %s above %s", candidate, start)
            return candidate

    raise NotARepositoryError("not in a git repository or git-manager workspace")


def _stat_mode(path: Path) -> int | None:
    try:
        return path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise FilesystemError(f"Unable to inspect {path}: {exc}") from exc


def _read_gitdir_file(path: Path) -> Path:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Error reading .git file {path}: {exc}") from exc
    for line in content.splitlines():
        if line.startswith(GITDIR_PREFIX):
            target = Path(line[len(GITDIR_PREFIX):].strip())
            break
    else:
        raise GitDirParseError(f"{path} does not contain a '{GITDIR_PREFIX.strip()}' reference")
    if not target.is_absolute():
        target = path.parent / target
    return Path(os.path.normpath(target))
