"""Materialize bundled shell integration files on disk.

Several terminals may start at the same moment and extract into the same cache
directory. Regular files and symlinks are only ever replaced atomically and
unchanged entries are never rewritten, so concurrent extractions converge without locking.
"""

import logging
import os
from pathlib import Path

from .exceptions import ShellIntegrationInstallError
from .protocols import AssetStoreProtocol
from .schema import AssetEntry
from .schema import AssetType
from .utils import atomic_symlink
from .utils import atomic_write_file

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


def asset_prefix(shell_name: str) -> str:
    """Return the asset path prefix holding files for shell_name."""
    return f"shell-integration/{shell_name}/"


def _is_unchanged(dest: Path, data: bytes) -> bool:
    try:
        return dest.read_bytes() == data
    except OSError:
        return False


def _ensure_symlink(dest: Path, target: str) -> bool:
    """Point dest at target. Returns False if it already did."""
    if dest.is_symlink() and os.readlink(dest) == target:
        return False
    atomic_symlink(target, dest)
    return True


def _materialize(entry: AssetEntry, dest: Path) -> bool:
    """Write a single entry to dest. Returns whether anything changed on disk."""
    dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

    if entry.type == AssetType.DIRECTORY:
        dest.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        return False

    if entry.type == AssetType.SYMLINK:
        return _ensure_symlink(dest, entry.linkname)

    # A leftover symlink is replaced even if it resolves to identical bytes
    if not dest.is_symlink() and _is_unchanged(dest, entry.data):
        logger.debug(f"Unchanged, skipping: {dest}")
        return False
    atomic_write_file(dest, entry.data, mode=FILE_MODE)
    return True


def extract_shell_integration_for(store: AssetStoreProtocol, shell_name: str, dest_dir: Path) -> int:
    """
    Copy the integration files for one shell from store into dest_dir.

    Every asset under "shell-integration/<shell_name>/" is written to
    dest_dir/<asset path>, preserving the relative layout:
    - Directories are created with mode 0o755
    - Symlinks are (re)created pointing at their stored target
    - Regular files are written atomically with mode 0o644, unless the
      existing file already has identical contents

    Args:
        store: Source of the bundled assets
        shell_name: Shell whose files to extract
        dest_dir: Extraction root

    Returns:
        Number of files and symlinks written

    Raises:
        ShellIntegrationInstallError: If a directory, symlink or file cannot be
            written. Files written before the failure are left in place.

    Example:
        >>> extract_shell_integration_for(store, "zsh", Path("~/.cache/kitty/extracted-ksi"))
        3
    """
    written = 0
    for path in store.files_matching(asset_prefix(shell_name)):
        entry = store.get(path)
        dest = dest_dir / path
        try:
            if _materialize(entry, dest):
                written += 1
        except OSError as e:
            raise ShellIntegrationInstallError(
                f"Failed to extract {path} to {dest}: {e}",
                context={"shell_name": shell_name, "path": path, "dest": str(dest)},
            ) from e

    logger.info(f"Extracted {shell_name} integration to {dest_dir} ({written} written)")
    return written
