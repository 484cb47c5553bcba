"""Shell integration scripts and the eval-line convention they consume."""

from __future__ import annotations

import shlex
from pathlib import Path

from .config import EVAL_PREFIX, PROGRAM_NAME
from .exceptions import ValidationError

COMMANDS = "init create list switch remove shell"

_POSIX_SCRIPT = r"""# Git Manager Shell Integration
# Add this to your .bashrc, .zshrc, or .profile file

# Wrapper that evaluates git-manager-eval: lines so `switch` can change directory
git-manager() {
  local output
  output=$(command git-manager "$@")
  local exit_code=$?

  local eval_cmd=""
  local line
  if [ -n "$output" ]; then
    while IFS= read -r line; do
      case "$line" in
        git-manager-eval:*) eval_cmd="${line#git-manager-eval:}" ;;
        *) printf '%s\n' "$line" ;;
      esac
    done <<EOF
$output
EOF
  fi

  if [ -n "$eval_cmd" ]; then
    eval "$eval_cmd"
  fi

  return $exit_code
}

alias gm=git-manager
"""

_BASH_COMPLETION = r"""
if [ -n "$BASH_VERSION" ]; then
  _git_manager_completion() {
    local cur prev
    COMPREPLY=()
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"

    if [ "$prev" = "switch" ] || [ "$prev" = "remove" ]; then
      local worktrees
      worktrees=$(command git-manager list --quiet 2>/dev/null)
      COMPREPLY=( $(compgen -W "${worktrees}" -- "${cur}") )
      return 0
    fi

    if [ "$COMP_CWORD" -eq 1 ]; then
      COMPREPLY=( $(compgen -W "%(commands)s" -- "${cur}") )
      return 0
    fi
  }

  complete -F _git_manager_completion git-manager
  complete -F _git_manager_completion gm
fi
"""

_ZSH_COMPLETION = r"""
if [ -n "$ZSH_VERSION" ]; then
  _git_manager_completion() {
    if (( CURRENT == 2 )); then
      compadd -- %(commands)s
    elif [[ "${words[2]}" == "switch" || "${words[2]}" == "remove" ]]; then
      compadd -- ${(f)"$(command git-manager list --quiet 2>/dev/null)"}
    fi
  }
  if (( $+functions[compdef] )); then
    compdef _git_manager_completion git-manager
    compdef _git_manager_completion gm
  fi
fi
"""

_FISH_SCRIPT = r"""# Git Manager Shell Integration for Fish
# Save this to ~/.config/fish/functions/git-manager.fish

function git-manager
  set -l output (command git-manager $argv)
  set -l exit_code $status

  set -l eval_cmd ""
  for line in $output
    if string match -q "git-manager-eval:*" -- $line
      set eval_cmd (string replace "git-manager-eval:" "" -- $line)
    else
      echo $line
    end
  end

  if test -n "$eval_cmd"
    eval $eval_cmd
  end

  return $exit_code
end

alias gm=git-manager

complete -c git-manager -f -n "__fish_use_subcommand" -a "%(commands)s" -d "Git Manager command"
complete -c git-manager -f -n "__fish_seen_subcommand_from switch remove" -a "(command git-manager list --quiet 2>/dev/null)" -d "Worktree"
complete -c gm -f -n "__fish_use_subcommand" -a "%(commands)s" -d "Git Manager command"
complete -c gm -f -n "__fish_seen_subcommand_from switch remove" -a "(command git-manager list --quiet 2>/dev/null)" -d "Worktree"
"""

_NUSHELL_SCRIPT = r"""# Git Manager Shell Integration for Nushell
# Save this to your Nushell config file

def "nu-complete git-manager-commands" [] {
  [%(quoted_commands)s]
}

def "nu-complete git-manager-worktrees" [] {
  ^git-manager list --quiet | lines
}

# Nushell cannot eval strings, so only `cd` eval lines are honoured
def --env git-manager [...args: string] {
  let result = (do { ^git-manager ...$args } | complete)
  let lines = ($result.stdout | lines)

  for line in ($lines | where {|l| not ($l | str starts-with "git-manager-eval:") }) {
    print $line
  }
  if ($result.stderr | is-not-empty) {
    print -e ($result.stderr | str trim --right)
  }

  let evals = ($lines | where {|l| $l | str starts-with "git-manager-eval:cd " })
  if ($evals | is-not-empty) {
    let target = ($evals | last | str replace "git-manager-eval:cd " "" | str trim --char "'")
    cd $target
  }

  if $result.exit_code != 0 {
    error make { msg: $"git-manager exited with code ($result.exit_code)" }
  }
}

alias gm = git-manager
"""

INSTALL_HINTS = {
    "sh": "# echo 'eval \"$(git-manager shell sh)\"' >> ~/.profile",
    "bash": "# echo 'source <(git-manager shell bash)' >> ~/.bashrc",
    "zsh": "# echo 'source <(git-manager shell zsh)' >> ~/.zshrc",
    "fish": "# git-manager shell fish > ~/.config/fish/functions/git-manager.fish",
    "nushell": "# git-manager shell nushell | save --append ~/.config/nushell/config.nu",
}

SUPPORTED_SHELLS = tuple(INSTALL_HINTS)


def render_script(shell_type: str) -> str:
    """Return the integration script for `shell_type`, install hint included."""

    values = {
        "commands": COMMANDS,
        "quoted_commands": ", ".join(f'"{command}"' for command in COMMANDS.split()),
    }
    if shell_type == "sh":
        body = _POSIX_SCRIPT
    elif shell_type == "bash":
        body = _POSIX_SCRIPT + _BASH_COMPLETION % values
    elif shell_type == "zsh":
        body = _POSIX_SCRIPT + _ZSH_COMPLETION % values
    elif shell_type == "fish":
        body = _FISH_SCRIPT % values
    elif shell_type == "nushell":
        body = _NUSHELL_SCRIPT % values
    else:
        raise ValidationError(
            f"Unsupported shell type: {shell_type}\nSupported shell types: {', '.join(SUPPORTED_SHELLS)}"
        )
    return f"{body}\n# To install, run:\n{INSTALL_HINTS[shell_type]}\n"


def eval_line(path: Path) -> str:
    """Line asking the shell wrapper to cd into `path`."""

    return f"{EVAL_PREFIX}cd {shlex.quote(str(path))}"


def shell_hint() -> str:
    return f"{PROGRAM_NAME} shell [your-shell]"
