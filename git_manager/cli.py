"""Typer-based CLI for git-manager."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import PROGRAM_NAME, CreateOptions, RemoveOptions, Settings, configure_logging, load_settings
from .exceptions import GitCommandError, GitManagerError, ValidationError
from .interactive import Choice, fuzzy_select
from .models import WorktreeRecord
from .shell import eval_line, render_script, shell_hint
from .worktrees import WorktreeService, init_workspace

app = typer.Typer(
    help="Manage git repositories using worktrees.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class AppState:
    settings: Settings
    start: Path
    console: Console
    verbose: bool = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGRAM_NAME} {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-C",
        help="Directory to run in (defaults to the current working directory).",
        file_okay=False,
        dir_okay=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-manager version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    start = Path(os.path.normpath(repo.expanduser().absolute())) if repo else Path.cwd()
    ctx.obj = AppState(
        settings=load_settings(),
        start=start,
        console=Console(highlight=False, soft_wrap=True),
        verbose=verbose,
    )


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


def _build_service(state: AppState) -> WorktreeService:
    try:
        return WorktreeService.locate(state.start, state.console)
    except GitManagerError as err:
        _fail(err)


@app.command(help="Clone a repository into a new git-manager workspace.")
def init(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the repository to clone."),
) -> None:
    state = _require_state(ctx)
    try:
        repo_dir, main_dir = init_workspace(url, state.start, state.console)
    except GitManagerError as err:
        _fail(err)
    state.console.print(f"\nGit Manager workspace initialized successfully in {repo_dir}", markup=False)
    state.console.print(f"Main worktree created at {main_dir}", markup=False)
    state.console.print("\nYou can now cd into the main directory and start working:")
    state.console.print(f"  cd {main_dir}", markup=False)


@app.command(help="Create a new worktree beside the repository's git directory.")
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Branch name, also used as the worktree directory name."),
    create_branch: bool = typer.Option(
        False, "--create-branch", "-b", help="Create a new branch for the worktree."
    ),
    base: Optional[str] = typer.Option(
        None,
        "--base",
        help="Base branch for the new branch (used with --create-branch). Defaults to main.",
    ),
    switch: bool = typer.Option(False, "--switch", "-s", help="Switch to the new worktree after creation."),
) -> None:
    state = _require_state(ctx)
    service = _build_service(state)
    options = CreateOptions(
        name=name,
        create_branch=create_branch,
        base_branch=base or state.settings.base_branch,
        switch=switch,
    )
    try:
        target = service.create_worktree(options)
    except GitManagerError as err:
        _fail(err)
    state.console.print(f"\nWorktree created successfully at {target}", markup=False)
    if options.switch:
        typer.echo(eval_line(target))
    _print_cd_instructions(state.console, target)
    if not options.switch:
        state.console.print("\nTo automatically switch to new worktrees, use the --switch flag:")
        state.console.print(f"  {PROGRAM_NAME} create --switch {name}", markup=False)


def list_worktrees(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print worktree names only."),
) -> None:
    state = _require_state(ctx)
    service = _build_service(state)
    try:
        entries = service.list_worktrees()
    except GitManagerError as err:
        _fail(err)
    if as_json:
        typer.echo(json.dumps([_record_to_dict(entry, service.worktree_name(entry)) for entry in entries], indent=2))
        return
    if quiet:
        for entry in entries:
            if not entry.is_bare:
                typer.echo(printable(service.worktree_name(entry)))
        return
    if not entries:
        state.console.print("No worktrees found.")
        return
    state.console.print(render_worktree_table(entries))


app.command("list", help="List all worktrees of the current repository.")(list_worktrees)
app.command("ls", help="Alias for list.", hidden=True)(list_worktrees)


@app.command(help="Switch to a worktree (changes directory with shell integration).")
def switch(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(
        None, help="Worktree name. If omitted, an interactive picker is shown."
    ),
) -> None:
    state = _require_state(ctx)
    service = _build_service(state)
    try:
        if name:
            record = service.find_worktree(name)
        else:
            entries = [entry for entry in service.list_worktrees() if not entry.is_bare]
            if not entries:
                raise ValidationError("No worktrees available.")
            record = _prompt_worktree(entries)
    except GitManagerError as err:
        _fail(err)
    state.console.print(f"Worktree path: {record.path}", markup=False)
    typer.echo(eval_line(record.path))
    _print_cd_instructions(state.console, record.path)


@app.command(help="Remove a worktree.")
def remove(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(
        None, help="Worktree name. If omitted, an interactive picker is shown."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Force removal even if the worktree is dirty."),
    delete_branch: bool = typer.Option(
        False, "--delete-branch", "-d", help="Delete the branch associated with the worktree."
    ),
) -> None:
    state = _require_state(ctx)
    service = _build_service(state)
    try:
        if name:
            record = service.remove_worktree(RemoveOptions(name=name, force=force, delete_branch=delete_branch))
        else:
            entries = service.removable_worktrees(current=state.start)
            if not entries:
                raise ValidationError("No removable worktrees available.")
            record = _prompt_worktree(entries)
            branch = None
            if delete_branch:
                if record.branch:
                    branch = record.branch
                else:
                    state.console.print("Worktree is detached; no branch to delete.")
            service.remove_record(record, force=force, branch=branch)
    except GitManagerError as err:
        _fail(err)
    state.console.print(f"\nWorktree '{service.worktree_name(record)}' removed successfully", markup=False)


@app.command(help="Generate shell integration scripts (sh, bash, zsh, fish, nushell).")
def shell(
    shell_type: str = typer.Argument(..., help="Shell to generate the integration script for."),
) -> None:
    try:
        script = render_script(shell_type)
    except GitManagerError as err:
        _fail(err)
    typer.echo(script, nl=False)


def render_worktree_table(entries: list[WorktreeRecord]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("PATH", overflow="fold")
    table.add_column("BRANCH")
    table.add_column("COMMIT")
    table.add_column("STATUS")
    for entry in entries:
        if entry.is_bare:
            branch, commit = entry.branch or "(bare)", "n/a"
        else:
            branch, commit = entry.branch or "(detached)", entry.short_commit or "-"
        table.add_row(printable(str(entry.path)), branch, commit, entry.status)
    return table


def _record_to_dict(entry: WorktreeRecord, name: str) -> dict[str, object]:
    return {
        "name": name,
        "path": str(entry.path),
        "branch": entry.branch,
        "commit": entry.commit,
        "bare": entry.is_bare,
        "status": entry.status,
    }


def printable(text: str) -> str:
    """Replace undecodable path bytes so the text can always be written out."""

    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _print_cd_instructions(console: Console, path: Path) -> None:
    console.print("\nIf you're not using shell integration, run:")
    console.print(f"  cd {path}", markup=False)
    console.print("\nTo enable shell integration, run:")
    console.print(f"  {shell_hint()}", markup=False)


def _prompt_worktree(entries: list[WorktreeRecord]) -> WorktreeRecord:
    choices, lookup = _build_worktree_choice_data(entries)
    selection = fuzzy_select("Select worktree", choices)
    try:
        return lookup[str(selection)]
    except KeyError as exc:
        raise ValidationError("Selected worktree could not be resolved.") from exc


def _build_worktree_choice_data(entries: list[WorktreeRecord]) -> tuple[list[Choice], dict[str, WorktreeRecord]]:
    """Return the choice list used for prompts plus a lookup keyed by path."""

    lookup: dict[str, WorktreeRecord] = {}
    path_choices: list[Choice] = []
    for entry in entries:
        key = str(entry.path)
        if key in lookup:
            raise ValidationError(f"Duplicate worktree path detected: {key}")
        lookup[key] = entry
        path_choices.append(Choice(value=key, name=f"{entry.display_name} · {entry.path}"))
    return path_choices, lookup


def _fail(err: GitManagerError) -> NoReturn:
    code = err.returncode if isinstance(err, GitCommandError) and err.returncode > 0 else 1
    typer.secho(f"Error: {err}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
