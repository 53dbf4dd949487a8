"""Per-shell startup strategies.

Each strategy rewrites (argv, env) so the shell sources the integration scripts
in integration_dir. Strategies mutate the argv/env they are given; the
dispatcher hands them copies.
"""

import logging
import os
import subprocess
from collections.abc import Callable
from pathlib import Path

from .protocols import CommandRunnerProtocol
from .schema import ShellName
from .utils import find_exe

logger = logging.getLogger(__name__)

ZSH_RC_FILES = (".zshrc", ".zshenv", ".zprofile", ".zlogin")

SetupFunc = Callable[
    [Path, list[str], dict[str, str], CommandRunnerProtocol],
    tuple[list[str], dict[str, str]],
]


def is_new_zsh_install(env: dict[str, str], zdotdir: str) -> bool:
    """
    Check whether zsh would run zsh-newuser-install for this configuration.

    With ZDOTDIR empty zsh reads rc files from HOME. The new user wizard runs
    when none of the four startup files exist there.

    Args:
        env: Environment the shell will run with
        zdotdir: ZDOTDIR value, empty when unset

    Returns:
        True if no startup file exists, or no home directory can be found
    """
    if not zdotdir:
        zdotdir = env.get("HOME", "")
        if not zdotdir:
            try:
                zdotdir = str(Path.home())
            except (RuntimeError, KeyError):
                return True
    return not any(os.path.exists(os.path.join(zdotdir, name)) for name in ZSH_RC_FILES)


def zsh_zdotdir_from_global_zshenv(argv: list[str], env: dict[str, str], runner: CommandRunnerProtocol) -> str:
    """Ask zsh, with user rc files disabled, what ZDOTDIR the global zshenv sets."""
    if not argv:
        return ""
    args = [find_exe(argv[0]), "--norcs", "--interactive", "-c", "echo -n $ZDOTDIR"]
    try:
        raw = runner.output(args, env)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Could not read global ZDOTDIR from {args[0]}: {e}")
        return ""
    return raw.decode("utf-8", "replace")


def setup_zsh(
    integration_dir: Path,
    argv: list[str],
    env: dict[str, str],
    runner: CommandRunnerProtocol,
) -> tuple[list[str], dict[str, str]]:
    """
    Point ZDOTDIR at the integration directory.

    The wrapper rc files there load the user's own files from
    KITTY_ORIG_ZDOTDIR. A fresh install is left untouched so the new user
    wizard still runs. Root is treated like any other user.
    """
    zdotdir = env.get("ZDOTDIR", "")
    if is_new_zsh_install(env, zdotdir):
        if zdotdir:
            # ZDOTDIR explicitly points at an empty profile, let the wizard run
            return argv, env
        zdotdir = zsh_zdotdir_from_global_zshenv(argv, env, runner)
        if not zdotdir or is_new_zsh_install(env, zdotdir):
            logger.debug("Fresh zsh install, leaving ZDOTDIR alone")
            return argv, env

    if zdotdir:
        env["KITTY_ORIG_ZDOTDIR"] = zdotdir
    else:
        # A global zshenv may have set this in a parent shell
        env.pop("KITTY_ORIG_ZDOTDIR", None)
    env["ZDOTDIR"] = str(integration_dir)
    return argv, env


def setup_fish(
    integration_dir: Path,
    argv: list[str],
    env: dict[str, str],
    runner: CommandRunnerProtocol,
) -> tuple[list[str], dict[str, str]]:
    """Prepend the integration data directory to XDG_DATA_DIRS."""
    data_dir = str(integration_dir.parent)
    env["KITTY_FISH_XDG_DATA_DIR"] = data_dir
    existing = env.get("XDG_DATA_DIRS", "")
    if existing:
        dirs = [d for d in existing.split(os.pathsep) if d]
        env["XDG_DATA_DIRS"] = os.pathsep.join([data_dir, *dirs])
    else:
        env["XDG_DATA_DIRS"] = data_dir
    return argv, env


def setup_bash(
    integration_dir: Path,
    argv: list[str],
    env: dict[str, str],
    runner: CommandRunnerProtocol,
) -> tuple[list[str], dict[str, str]]:
    # bash is wired up through --rcfile by the launcher
    return argv, env


SETUP_FUNCS: dict[ShellName, SetupFunc] = {
    ShellName.BASH: setup_bash,
    ShellName.ZSH: setup_zsh,
    ShellName.FISH: setup_fish,
}


def setup_func_for_shell(shell_name: str) -> SetupFunc | None:
    try:
        return SETUP_FUNCS[ShellName(shell_name)]
    except ValueError:
        return None


def is_supported_shell(shell_name: str) -> bool:
    """Return True if shell_name has integration support."""
    return setup_func_for_shell(shell_name) is not None


def shell_name_for(executable: str) -> str | None:
    """
    Map a shell executable to its supported shell name.

    Examples:
        >>> shell_name_for("/usr/bin/zsh")
        'zsh'
        >>> shell_name_for("fish.exe")
        'fish'
        >>> shell_name_for("/bin/tcsh") is None
        True
    """
    name = os.path.basename(executable).lower().removesuffix(".exe")
    if is_supported_shell(name):
        return name
    return None
