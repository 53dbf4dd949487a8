"""Filesystem and process helpers."""

import logging
import os
import shutil
import subprocess
import sys
import tempfile
import time
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

# Searched after PATH, since shells are often started with a minimal environment
DEFAULT_EXE_SEARCH_PATH = (
    "/usr/local/bin",
    "/opt/bin",
    "/opt/homebrew/bin",
    "/usr/bin",
    "/bin",
    "/usr/sbin",
    "/sbin",
)


def atomic_write_file(path: Path, data: bytes, mode: int = 0o644) -> None:
    """
    Write data to path so readers never observe a partial file.

    Data goes to a temporary file in the same directory, which is flushed,
    given its final permissions and then renamed over path.

    Args:
        path: Destination file
        data: File contents
        mode: Permission bits for the final file

    Raises:
        OSError: If any step fails. The temporary file is removed first.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def atomic_symlink(target: str, path: Path) -> None:
    """
    Make path a symlink to target without path ever being absent.

    The link is created under a unique temporary name in the same directory
    and renamed over path, replacing whatever link or file was there.

    Raises:
        OSError: If the link cannot be created or renamed. The temporary link is removed first.
    """
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.{time.time_ns()}.tmp")
    os.symlink(target, tmp_path)
    try:
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


def cache_dir(environ: Mapping[str, str] | None = None) -> Path:
    """
    Return the application cache directory (not created).

    Resolution order:
    1. KITTY_CACHE_DIRECTORY
    2. ~/Library/Caches/kitty on macOS
    3. $XDG_CACHE_HOME/kitty
    4. ~/.cache/kitty

    Args:
        environ: Environment to read, defaults to the process environment

    Returns:
        Absolute cache directory path
    """
    if environ is None:
        environ = os.environ

    override = environ.get("KITTY_CACHE_DIRECTORY", "")
    if override:
        return Path(override).expanduser().absolute()

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / "kitty"

    xdg_cache_home = environ.get("XDG_CACHE_HOME", "")
    if xdg_cache_home:
        return Path(xdg_cache_home).expanduser().absolute() / "kitty"
    return Path.home() / ".cache" / "kitty"


def find_exe(name: str) -> str:
    """Resolve name to an executable path, returning name unchanged if not found."""
    if os.sep in name:
        return name
    found = shutil.which(name)
    if found is None:
        found = shutil.which(name, path=os.pathsep.join(DEFAULT_EXE_SEARCH_PATH))
    return found or name


class SubprocessRunner:
    """CommandRunnerProtocol implementation backed by subprocess.run."""

    def output(self, args: list[str], env: dict[str, str]) -> bytes:
        logger.debug(f"Running {args}")
        result = subprocess.run(
            args,
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=True,
        )
        return result.stdout
