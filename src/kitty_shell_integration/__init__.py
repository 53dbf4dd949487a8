"""kitty-shell-integration - Launch bash, zsh and fish with terminal integration scripts.

Public API exports. Apps inject the asset store and, optionally, configuration
and a process runner.
"""

from .assets import AssetStore
from .config import ShellIntegrationConfig
from .exceptions import ShellIntegrationError
from .exceptions import ShellIntegrationInstallError
from .exceptions import UnsupportedShellError
from .extractor import extract_shell_integration_for
from .integration import setup
from .protocols import AssetStoreProtocol
from .protocols import CommandRunnerProtocol
from .resolver import ShellIntegrationResolver
from .resolver import ensure_shell_integration_files_for
from .schema import AssetEntry
from .schema import AssetType
from .schema import ShellName
from .shells import is_supported_shell
from .shells import shell_name_for
from .utils import SubprocessRunner

__all__ = [
    # Setup
    "setup",
    "is_supported_shell",
    "shell_name_for",
    # Assets
    "AssetEntry",
    "AssetStore",
    "AssetStoreProtocol",
    "AssetType",
    "ShellName",
    # Resolution and extraction
    "ShellIntegrationConfig",
    "ShellIntegrationResolver",
    "ensure_shell_integration_files_for",
    "extract_shell_integration_for",
    # Processes
    "CommandRunnerProtocol",
    "SubprocessRunner",
    # Exceptions
    "ShellIntegrationError",
    "ShellIntegrationInstallError",
    "UnsupportedShellError",
]

__version__ = "0.1.0"
