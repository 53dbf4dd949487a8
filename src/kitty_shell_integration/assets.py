"""In-memory asset store.

Holds the bundled shell integration tree. Apps that embed the tree some other
way only need to satisfy AssetStoreProtocol.
"""

import logging
import tarfile
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from .schema import AssetEntry
from .schema import AssetType

logger = logging.getLogger(__name__)


class AssetStore:
    """
    Dict-backed implementation of AssetStoreProtocol.

    Example:
        >>> store = AssetStore.from_tarfile(Path("/usr/lib/kitty/data.tar"))
        >>> store.files_matching("shell-integration/fish/")
        ['shell-integration/fish/vendor_completions.d', ...]
    """

    def __init__(self, entries: Iterable[AssetEntry] = ()):
        self._entries: dict[str, AssetEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: AssetEntry) -> None:
        """Add or replace an entry, keyed by its path."""
        self._entries[entry.path] = entry

    def files_matching(self, prefix: str) -> list[str]:
        # Sorted so that a directory is always visited before its contents
        return sorted(path for path in self._entries if path.startswith(prefix))

    def get(self, path: str) -> AssetEntry:
        return self._entries[path]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    @classmethod
    def from_tarfile(cls, source: Path | IO[bytes]) -> "AssetStore":
        """
        Load a store from a tar archive.

        Regular files, directories and symlinks are kept; any other member
        type (hard links, devices, fifos) is skipped.

        Args:
            source: Path to the archive, or a binary file object positioned at its start

        Returns:
            AssetStore with one entry per supported member

        Raises:
            tarfile.TarError: If the archive cannot be read
        """
        if isinstance(source, Path):
            archive = tarfile.open(source, mode="r:*")
        else:
            archive = tarfile.open(fileobj=source, mode="r:*")

        store = cls()
        with archive:
            for member in archive.getmembers():
                path = member.name.removeprefix("./").rstrip("/")
                if not path:
                    continue
                if member.isdir():
                    store.add(AssetEntry(path=path, type=AssetType.DIRECTORY))
                elif member.issym():
                    store.add(AssetEntry(path=path, type=AssetType.SYMLINK, linkname=member.linkname))
                elif member.isfile():
                    f = archive.extractfile(member)
                    data = f.read() if f is not None else b""
                    store.add(AssetEntry(path=path, type=AssetType.REGULAR, data=data))
                else:
                    logger.debug(f"Skipping unsupported archive member: {member.name}")

        logger.debug(f"Loaded {len(store)} assets from archive")
        return store
