"""Integration directory resolver - find or extract a shell's integration files.

An installed application ships the files next to itself; otherwise they are
extracted from the asset store into the cache directory. Both locations are
injected by the app through ShellIntegrationConfig.
"""

import logging
from pathlib import Path

from .config import ShellIntegrationConfig
from .exceptions import ShellIntegrationInstallError
from .extractor import DIR_MODE
from .extractor import extract_shell_integration_for
from .protocols import AssetStoreProtocol

logger = logging.getLogger(__name__)

EXTRACTED_SUBDIR = "extracted-ksi"
INTEGRATION_SUBDIR = "shell-integration"


class ShellIntegrationResolver:
    """
    Resolve a shell name to a directory holding its integration files.

    Philosophy:
    - Installed files win, extraction is the fallback
    - No in-process caching; re-extraction is idempotent on disk
    """

    def __init__(
        self,
        store: AssetStoreProtocol,
        cache_dir: Path,
        installation_dir: Path | None = None,
    ):
        """Initialize resolver with app-provided locations.

        Args:
            store: Source of bundled assets, used when extraction is needed
            cache_dir: Base cache directory
            installation_dir: Optional installed application root

        Example:
            >>> resolver = ShellIntegrationResolver(
            ...     store=store,
            ...     cache_dir=Path.home() / ".cache" / "kitty",
            ...     installation_dir=Path("/usr/lib/kitty"),
            ... )
        """
        self.store = store
        self.cache_dir = cache_dir
        self.installation_dir = installation_dir

    @classmethod
    def from_config(cls, store: AssetStoreProtocol, config: ShellIntegrationConfig) -> "ShellIntegrationResolver":
        return cls(store=store, cache_dir=config.cache_dir, installation_dir=config.installation_dir)

    @property
    def extraction_dir(self) -> Path:
        return self.cache_dir / EXTRACTED_SUBDIR

    def installed_dir_for(self, shell_name: str) -> Path | None:
        """Return the installed integration directory for shell_name, if any."""
        if self.installation_dir is None or not self.installation_dir.is_dir():
            return None
        candidate = self.installation_dir / INTEGRATION_SUBDIR / shell_name
        if candidate.is_dir():
            return candidate
        return None

    def ensure_files_for(self, shell_name: str) -> Path:
        """
        Return a directory containing the integration files for shell_name.

        Resolution order:
        1. installation_dir/shell-integration/<shell_name>, if it exists
        2. cache_dir/extracted-ksi/shell-integration/<shell_name>, after extracting

        Args:
            shell_name: Supported shell name

        Returns:
            Path to the shell's integration directory

        Raises:
            ShellIntegrationInstallError: If the cache directory cannot be
                created or extraction fails
        """
        installed = self.installed_dir_for(shell_name)
        if installed is not None:
            logger.debug(f"Using installed {shell_name} integration: {installed}")
            return installed

        base = self.extraction_dir
        try:
            base.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ShellIntegrationInstallError(
                f"Failed to create cache directory {base}: {e}",
                context={"shell_name": shell_name, "cache_dir": str(base)},
            ) from e

        extract_shell_integration_for(self.store, shell_name, base)
        return base / INTEGRATION_SUBDIR / shell_name


def ensure_shell_integration_files_for(
    shell_name: str,
    store: AssetStoreProtocol,
    config: ShellIntegrationConfig | None = None,
) -> Path:
    """Resolve shell_name's integration directory using config, or the process environment."""
    if config is None:
        config = ShellIntegrationConfig.from_environ()
    return ShellIntegrationResolver.from_config(store, config).ensure_files_for(shell_name)
