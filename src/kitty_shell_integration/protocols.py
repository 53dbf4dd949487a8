"""Protocols for the collaborators shell integration depends on.

The asset store and the process runner are environment dependent; apps inject
implementations so tests can substitute in-memory fakes.
"""

from typing import Protocol
from typing import runtime_checkable

from .schema import AssetEntry


@runtime_checkable
class AssetStoreProtocol(Protocol):
    """Read-only tree of bundled assets keyed by relative path.

    Example implementations:
    - AssetStore: in-memory store, optionally loaded from a tar archive
    - A store backed by data embedded in the application binary
    """

    def files_matching(self, prefix: str) -> list[str]:
        """Return asset paths starting with prefix.

        Args:
            prefix: Path prefix, e.g. "shell-integration/zsh/"

        Returns:
            Matching paths, parents before children
        """
        ...

    def get(self, path: str) -> AssetEntry:
        """Return the entry stored at path.

        Raises:
            KeyError: If no asset exists at path
        """
        ...


@runtime_checkable
class CommandRunnerProtocol(Protocol):
    """Runs a command to completion and captures its stdout."""

    def output(self, args: list[str], env: dict[str, str]) -> bytes:
        """Run args with env as the complete child environment.

        Args:
            args: Executable followed by its arguments
            env: Environment for the child process

        Returns:
            Captured stdout

        Raises:
            OSError: If the command cannot be spawned
            subprocess.SubprocessError: If the command exits unsuccessfully
        """
        ...
