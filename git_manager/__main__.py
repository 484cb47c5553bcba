"""Module entrypoint for `python -m git_manager`."""

from __future__ import annotations

from .cli import app


def main() -> None:
    app(prog_name="git-manager")


if __name__ == "__main__":
    main()
