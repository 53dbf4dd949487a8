"""Asset and shell data model."""

from enum import StrEnum

from pydantic import BaseModel
from pydantic import ConfigDict


class ShellName(StrEnum):
    """Shells that ship integration scripts."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"


class AssetType(StrEnum):
    """Kind of filesystem object an asset materializes as."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class AssetEntry(BaseModel):
    """
    A single file in the bundled asset tree.

    Paths are relative and use forward slashes, e.g.
    ``shell-integration/zsh/.zshrc``. Only symlinks carry a ``linkname``.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    type: AssetType = AssetType.REGULAR
    data: bytes = b""
    linkname: str = ""
