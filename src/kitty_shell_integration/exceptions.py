"""Shell integration exceptions.

Callers catch ShellIntegrationError and launch the shell without integration.
"""


class ShellIntegrationError(Exception):
    """Base exception for shell integration setup."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (shell name, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UnsupportedShellError(ShellIntegrationError):
    """Shell has no integration scripts."""


class ShellIntegrationInstallError(ShellIntegrationError):
    """Integration files could not be extracted to disk."""
