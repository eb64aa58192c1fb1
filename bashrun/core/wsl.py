import functools
import ntpath
import os
import re
import stat
from typing import Final

from logly import logger

from . import host

DEFAULT_SYSTEM_ROOT: Final[str] = "C:\\Windows"
WSL_BASH_SUFFIX: Final[str] = "system32\\bash.exe"

_DRIVE_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z]:")


def launcher_path() -> str:
    """Returns the expected location of `wsl.exe`.

    Built with Windows path rules so the result is the same on any host.
    """
    root = os.environ.get("SystemRoot", "") or DEFAULT_SYSTEM_ROOT
    return ntpath.join(root, "System32", "wsl.exe")


def detect_wsl() -> bool:
    """Checks whether the WSL launcher is installed.

    Always False outside Windows. A stat failure counts as not installed.
    """
    if not host.is_windows():
        return False

    path = launcher_path()
    try:
        info = os.stat(path)
    except OSError:
        logger.debug(f"WSL launcher not found at {path}")
        return False

    installed = not stat.S_ISDIR(info.st_mode)
    logger.debug(f"WSL launcher at {path} installed={installed}")
    return installed


@functools.cache
def wsl_installed() -> bool:
    """Snapshot of `detect_wsl()` taken on first use.

    Later changes to the environment or filesystem are not observed.
    """
    return detect_wsl()


def is_wsl_bash(executable: str) -> bool:
    """Case-insensitive check for `System32\\bash.exe`, with either separator."""
    return ntpath.normcase(executable).endswith(WSL_BASH_SUFFIX)


def to_wsl_path(path: str) -> str:
    """Converts a native Windows path to its WSL mount path.

    `C:\\Users\\me\\script.sh` becomes `/mnt/c/Users/me/script.sh`. Paths
    that do not start with a drive letter after absolutizing (e.g. UNC paths)
    are returned unchanged.

    Args:
        path: File path as given by the caller.

    Returns:
        The translated path.
    """
    try:
        path = ntpath.abspath(path)
    except (OSError, ValueError):
        pass

    if not _DRIVE_RE.match(path):
        return path

    return ("/mnt/" + path[0].lower() + path[2:]).replace("\\", "/")
