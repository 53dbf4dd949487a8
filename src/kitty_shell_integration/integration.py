"""Shell integration entry point.

Example:
    >>> store = AssetStore.from_tarfile(Path("/usr/lib/kitty/data.tar"))
    >>> try:
    ...     argv, env = setup("zsh", "enabled", ["zsh", "-l"], dict(os.environ), store=store)
    ... except ShellIntegrationError:
    ...     argv, env = ["zsh", "-l"], dict(os.environ)
"""

import logging
from collections.abc import Mapping
from collections.abc import Sequence

from .config import ShellIntegrationConfig
from .exceptions import UnsupportedShellError
from .protocols import AssetStoreProtocol
from .protocols import CommandRunnerProtocol
from .resolver import ensure_shell_integration_files_for
from .shells import setup_func_for_shell
from .utils import SubprocessRunner

logger = logging.getLogger(__name__)

MARKER_ENV = "KITTY_SHELL_INTEGRATION"


def setup(
    shell_name: str,
    ksi_var: str,
    argv: Sequence[str],
    env: Mapping[str, str],
    *,
    store: AssetStoreProtocol,
    config: ShellIntegrationConfig | None = None,
    runner: CommandRunnerProtocol | None = None,
) -> tuple[list[str], dict[str, str]]:
    """
    Compute the argv and environment that launch shell_name with integration.

    Process:
    1. Resolve the integration directory (installed, else extracted to cache)
    2. Copy argv and env
    3. Apply the shell-specific strategy to the copies
    4. Set KITTY_SHELL_INTEGRATION to ksi_var

    The caller's argv and env are never modified.

    Args:
        shell_name: One of "bash", "zsh", "fish"
        ksi_var: Value for KITTY_SHELL_INTEGRATION, tells the scripts which features to enable
        argv: Shell command line, argv[0] is the shell executable
        env: Environment the shell would otherwise be launched with
        store: Source of the bundled integration files
        config: Installation and cache locations, defaults to the process environment
        runner: Runs the global ZDOTDIR lookup for zsh, defaults to SubprocessRunner

    Returns:
        (argv, env) to launch the shell with

    Raises:
        UnsupportedShellError: If shell_name has no integration support
        ShellIntegrationInstallError: If the integration files cannot be extracted
    """
    setup_func = setup_func_for_shell(shell_name)
    if setup_func is None:
        raise UnsupportedShellError(
            f"Shell integration is not supported for: {shell_name}",
            context={"shell_name": shell_name},
        )

    ksi_dir = ensure_shell_integration_files_for(shell_name, store, config)
    if runner is None:
        runner = SubprocessRunner()

    final_argv, final_env = setup_func(ksi_dir, list(argv), dict(env), runner)
    final_env[MARKER_ENV] = ksi_var
    logger.debug(f"Configured {shell_name} integration from {ksi_dir}")
    return final_argv, final_env
