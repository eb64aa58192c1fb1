import os
import re
import shutil
from dataclasses import dataclass
from typing import Final

from logly import logger

from . import host

_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(r"\$\{([^}]+)\}")

_registry: dict[str, "Executable"] = {}


@dataclass(frozen=True, slots=True)
class Executable:
    """Describes how to locate an executable by its logical name.

    Attributes:
        name: Logical name (e.g. "bash").
        variable: Environment variable that overrides the search.
        windows: Candidate paths searched on Windows, in order.
        linux: Candidate paths searched on Unix-like systems, in order.
    """

    name: str
    variable: str = ""
    windows: tuple[str, ...] = ()
    linux: tuple[str, ...] = ()


def register(executable: Executable) -> None:
    """Registers an executable, replacing any previous entry with the same name."""
    _registry[executable.name] = executable


def lookup(name: str) -> Executable | None:
    return _registry.get(name)


def expand_placeholders(path: str) -> str | None:
    """Expands `${Name}` placeholders from the environment.

    Variable names may contain characters such as parentheses, so
    `${ProgramFiles(x86)}` is a valid placeholder.

    Args:
        path: Candidate path that may contain placeholders.

    Returns:
        The expanded path, or None if a referenced variable is unset or empty.
    """
    missing = False

    def _replace(match: re.Match[str]) -> str:
        nonlocal missing
        value = os.environ.get(match.group(1), "")
        if not value:
            missing = True
        return value

    expanded = _PLACEHOLDER_RE.sub(_replace, path)
    return None if missing else expanded


def candidates(executable: Executable) -> list[str]:
    """Returns the expanded candidate paths for the current OS family."""
    paths = executable.windows if host.is_windows() else executable.linux
    expanded: list[str] = []
    for path in paths:
        value = expand_placeholders(path)
        if value is not None:
            expanded.append(value)
    return expanded


def is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find(name: str) -> str:
    """Finds the path of a registered executable.

    The override variable wins when it points to an executable file, then the
    OS-specific candidates are tried in order. Names that were never
    registered fall back to a PATH lookup.

    Args:
        name: Logical executable name.

    Returns:
        The executable path, or an empty string if nothing matched.
    """
    executable = lookup(name)
    if executable is None:
        return shutil.which(name) or ""

    if executable.variable:
        override = os.environ.get(executable.variable, "")
        if override and is_executable(override):
            logger.debug(f"{name} resolved from {executable.variable}: {override}")
            return override

    for path in candidates(executable):
        if is_executable(path):
            logger.debug(f"{name} resolved to {path}")
            return path

    logger.debug(f"{name} not found in known locations")
    return ""
