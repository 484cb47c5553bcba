"""Runtime settings and per-command options."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

PROGRAM_NAME = "git-manager"
EVAL_PREFIX = f"{PROGRAM_NAME}-eval:"
DEFAULT_BASE_BRANCH = "main"
BASE_BRANCH_ENV = "GIT_MANAGER_BASE_BRANCH"


@dataclass(frozen=True)
class Settings:
    """Values resolved from the environment once per invocation."""

    base_branch: str = DEFAULT_BASE_BRANCH


@dataclass(frozen=True)
class CreateOptions:
    name: str
    create_branch: bool = False
    base_branch: str = DEFAULT_BASE_BRANCH
    switch: bool = False


@dataclass(frozen=True)
class RemoveOptions:
    name: str
    force: bool = False
    delete_branch: bool = False


def load_settings() -> Settings:
    base = os.environ.get(BASE_BRANCH_ENV, "").strip()
    return Settings(base_branch=base or DEFAULT_BASE_BRANCH)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
