"""High-level orchestration for worktree operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from . import git
from .config import CreateOptions, RemoveOptions
from .exceptions import NotARepositoryError, ValidationError
from .fs import ensure_directory, repo_name_from_url, worktree_target
from .gitdir import find_git_dir
from .models import WorktreeRecord

MAIN_WORKTREE_NAME = "main"

logger = logging.getLogger(__name__)


@dataclass
class WorktreeService:
    git_dir: Path
    console: Console

    @classmethod
    def locate(cls, start: Path, console: Console) -> "WorktreeService":
        """Build a service for the repository governing `start`."""

        if not git.is_git_repository(start):
            raise NotARepositoryError(
                "this command must be run from within a git repository. "
                "Please navigate to a git repository and try again"
            )
        return cls(git_dir=find_git_dir(start), console=console)

    @property
    def workspace_root(self) -> Path:
        return self.git_dir.parent

    def worktree_name(self, record: WorktreeRecord) -> str:
        """Name accepted by `find_worktree`: the path relative to the workspace root."""

        try:
            relative = record.path.relative_to(self.workspace_root)
        except ValueError:
            return record.name
        return relative.as_posix() if relative.parts else record.name

    def list_worktrees(self) -> list[WorktreeRecord]:
        return git.worktree_list(self.git_dir)

    def find_worktree(self, name: str) -> WorktreeRecord:
        """Resolve `name` to a registered worktree beside the git directory."""

        target = worktree_target(self.git_dir, name)
        if not target.exists():
            raise ValidationError(f"Worktree directory {target} does not exist")
        resolved = target.resolve()
        for record in self.list_worktrees():
            if record.path == target or record.path.resolve() == resolved:
                return record
        raise ValidationError(f"{target} is not a valid worktree")

    def create_worktree(self, options: CreateOptions) -> Path:
        target = worktree_target(self.git_dir, options.name)
        if target.exists():
            raise ValidationError(f"Directory {target} already exists")
        if options.create_branch:
            self.console.print(
                f"Creating new branch '{options.name}' based on '{options.base_branch}' and adding worktree...",
                markup=False,
            )
            git.worktree_add_new(self.git_dir, target, options.name, options.base_branch)
        else:
            self.console.print(f"Adding worktree for branch '{options.name}'...", markup=False)
            git.worktree_add_existing(self.git_dir, target, options.name)
        logger.debug("Created worktree %s", target)
        return target

    def remove_worktree(self, options: RemoveOptions) -> WorktreeRecord:
        record = self.find_worktree(options.name)
        branch = options.name if options.delete_branch else None
        self.remove_record(record, force=options.force, branch=branch)
        return record

    def remove_record(self, record: WorktreeRecord, *, force: bool = False, branch: str | None = None) -> None:
        """Remove a listed worktree, then delete `branch` when one is given."""

        if record.is_bare:
            raise ValidationError("Cannot remove the bare repository entry.")
        self.console.print(f"Removing worktree '{self.worktree_name(record)}'...", markup=False)
        git.worktree_remove(self.git_dir, record.path, force=force)
        if branch:
            self.console.print(f"Deleting branch '{branch}'...", markup=False)
            git.branch_delete(self.git_dir, branch)

    def removable_worktrees(self, current: Path | None = None) -> list[WorktreeRecord]:
        """Worktrees offered by the remove picker: no bare entry, not `current`."""

        entries = [record for record in self.list_worktrees() if not record.is_bare]
        if current is None:
            return entries
        current = current.resolve()
        return [
            record
            for record in entries
            if current != record.path.resolve() and record.path.resolve() not in current.parents
        ]


def init_workspace(url: str, parent: Path, console: Console) -> tuple[Path, Path]:
    """Clone `url` bare into `<parent>/<name>/.git` and add the `main` worktree.

    Returns the workspace directory and the initial worktree path.
    """

    repo_dir = parent / repo_name_from_url(url)
    git_dir = repo_dir / ".git"
    main_dir = repo_dir / MAIN_WORKTREE_NAME
    if git_dir.exists():
        raise ValidationError(f"{git_dir} already exists")
    ensure_directory(repo_dir)
    console.print(f"Cloning repository {url}...", markup=False)
    git.clone_bare(url, git_dir)
    console.print("Creating initial worktree...")
    git.worktree_add_default(git_dir, main_dir)
    return repo_dir, main_dir
