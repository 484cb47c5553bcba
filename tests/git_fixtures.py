"""Helpers that build throwaway git repositories for tests."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from git_manager import gitdir

GIT_AVAILABLE = shutil.which("git") is not None

requires_git = unittest.skipUnless(GIT_AVAILABLE, "git executable not available")


def git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test User",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "init.defaultBranch=main",
            *args,
        ],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout


def make_temp_dir(test: unittest.TestCase) -> Path:
    path = Path(tempfile.mkdtemp(prefix="git-manager-test-")).resolve()
    test.addCleanup(shutil.rmtree, path, ignore_errors=True)
    return path


def make_repo(root: Path, name: str = "repo") -> Path:
    """Create a repository on branch `main` with one commit."""

    repo = root / name
    repo.mkdir()
    git(repo, "init", "-q")
    (repo / "README.md").write_text("# Test Repository\n", encoding="utf-8")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "Initial commit")
    return repo


def make_workspace(root: Path) -> tuple[Path, Path]:
    """Lay out a workspace the way `init` does: a bare `.git` beside a `main` worktree."""

    origin = make_repo(root, "origin")
    workspace = root / "workspace"
    workspace.mkdir()
    git(root, "clone", "-q", "--bare", str(origin), str(workspace / ".git"))
    git(workspace / ".git", "worktree", "add", "-q", str(workspace / "main"), "main")
    return workspace, workspace / "main"


def hide_ancestor_repositories(test: unittest.TestCase, root: Path) -> None:
    """Treat `root` as the top of the filesystem for repository discovery.

    git stops at `root` through GIT_CEILING_DIRECTORIES and `find_git_dir` sees
    no `.git` entry above it, whatever the machine's temp directory sits in.
    """

    real_stat_mode = gitdir._stat_mode

    def stat_mode(path: Path) -> int | None:
        if path.parent == root or root in path.parents:
            return real_stat_mode(path)
        return None

    patchers = [
        mock.patch.dict(os.environ, {"GIT_CEILING_DIRECTORIES": str(root.parent)}),
        mock.patch.object(gitdir, "_stat_mode", side_effect=stat_mode),
    ]
    for patcher in patchers:
        patcher.start()
        test.addCleanup(patcher.stop)
