"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable

from .exceptions import GitCommandError, WorktreeListError
from .models import WorktreeRecord
from .porcelain import parse_worktree_porcelain

logger = logging.getLogger(__name__)


def run_git(
    args: Iterable[str],
    *,
    cwd: Path | None = None,
    capture: bool = True,
    raise_on_error: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure.

    With ``capture=False`` git inherits stdout/stderr so its own progress and
    error output reach the user directly.
    """

    cmd = ["git", *args]
    logger.debug("Running command: %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=capture,
            encoding="utf-8",
            # Paths may hold arbitrary bytes; round-trip them like os.fsdecode.
            errors="surrogateescape",
            check=False,
        )
    except OSError as exc:
        raise GitCommandError(cmd, 127, str(exc)) from exc
    if raise_on_error and proc.returncode != 0:
        raise GitCommandError(cmd, proc.returncode, proc.stderr if capture else None)
    return proc


def _rev_parse_flag(path: Path, flag: str) -> bool:
    try:
        proc = run_git(["rev-parse", flag], cwd=path)
    except GitCommandError:
        return False
    return proc.stdout.strip() == "true"


def is_bare_repository(path: Path) -> bool:
    return _rev_parse_flag(path, "--is-bare-repository")


def is_inside_work_tree(path: Path) -> bool:
    return _rev_parse_flag(path, "--is-inside-work-tree")


def is_git_repository(path: Path) -> bool:
    """True when `path` is a bare repository or lies inside a work tree."""

    return is_bare_repository(path) or is_inside_work_tree(path)


def worktree_list(git_dir: Path) -> list[WorktreeRecord]:
    try:
        proc = run_git(["worktree", "list", "--porcelain"], cwd=git_dir)
    except GitCommandError as exc:
        raise WorktreeListError(exc.command, exc.returncode, exc.stderr) from exc
    return parse_worktree_porcelain(proc.stdout)


def worktree_add_existing(git_dir: Path, target: Path, branch: str) -> None:
    run_git(["worktree", "add", str(target), branch], cwd=git_dir, capture=False)


def worktree_add_new(git_dir: Path, target: Path, branch: str, start_point: str) -> None:
    run_git(["worktree", "add", "-b", branch, str(target), start_point], cwd=git_dir, capture=False)


def worktree_add_default(git_dir: Path, target: Path) -> None:
    run_git(["worktree", "add", str(target)], cwd=git_dir, capture=False)


def worktree_remove(git_dir: Path, target: Path, force: bool = False) -> None:
    args = ["worktree", "remove"]
    if force:
        args.append("--force")
    args.append(str(target))
    run_git(args, cwd=git_dir, capture=False)


def branch_delete(git_dir: Path, branch: str) -> None:
    run_git(["branch", "-D", branch], cwd=git_dir, capture=False)


def clone_bare(remote: str, target: Path) -> None:
    run_git(["clone", "--bare", remote, str(target)], cwd=target.parent, capture=False)
