"""Custom exception hierarchy for git-manager."""

from __future__ import annotations


class GitManagerError(RuntimeError):
    """Base error for all custom exceptions."""


class FilesystemError(GitManagerError):
    """Raised when a path cannot be inspected or read."""


class NotARepositoryError(GitManagerError):
    """Raised when no git directory governs the starting directory."""


class GitDirParseError(GitManagerError):
    """Raised when a `.git` file lacks a `gitdir:` reference."""


class GitCommandError(GitManagerError):
    """Raised when a git invocation fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        if self.stderr.strip():
            message = f"{message}\n{self.stderr.strip()}"
        super().__init__(message)


class WorktreeListError(GitCommandError):
    """Raised when `git worktree list` cannot be run."""


class ValidationError(GitManagerError):
    """Raised when user input is invalid."""


class UserAbort(GitManagerError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "GitManagerError",
    "FilesystemError",
    "NotARepositoryError",
    "GitDirParseError",
    "GitCommandError",
    "WorktreeListError",
    "ValidationError",
    "UserAbort",
]
