"""Shell integration configuration.

Installation hint and cache root are process-wide settings. They are read from
the environment at call time and passed down explicitly, never cached at import.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .utils import cache_dir

INSTALLATION_DIR_ENV = "KITTY_INSTALLATION_DIR"


class ShellIntegrationConfig(BaseModel):
    """
    Where integration files come from.

    Attributes:
        installation_dir: Installed application root, checked before extracting
        cache_dir: Base cache directory, extraction goes to cache_dir/extracted-ksi
    """

    model_config = ConfigDict(frozen=True)

    installation_dir: Path | None = None
    cache_dir: Path

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ShellIntegrationConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Environment to read, defaults to the process environment

        Returns:
            ShellIntegrationConfig with installation_dir from KITTY_INSTALLATION_DIR
            (None when empty) and cache_dir from utils.cache_dir()

        Example:
            >>> config = ShellIntegrationConfig.from_environ({"KITTY_CACHE_DIRECTORY": "/tmp/kc"})
            >>> config.cache_dir
            PosixPath('/tmp/kc')
        """
        if environ is None:
            environ = os.environ

        installation_dir = environ.get(INSTALLATION_DIR_ENV, "")
        return cls(
            installation_dir=Path(installation_dir) if installation_dir else None,
            cache_dir=cache_dir(environ),
        )
