"""Locates bash and builds commands that run scripts through it.

Example:
    >>> from bashrun import bash
    >>> bash.script("apt install -y age curl zip").with_cwd("/tmp").run()
    >>> out = bash.output("/path/to/script.sh")
    >>> if not out.ok:
    ...     print(out.text("stderr"))
"""

import shlex
from typing import Final

from .core import executable, wsl
from .core.command import BashCommand, BashOutput

BASH: Final[str] = "bash"
STRICT_FLAGS: Final[tuple[str, ...]] = ("-noprofile", "--norc", "-e", "-o", "pipefail")

executable.register(
    executable.Executable(
        name=BASH,
        variable="BASH_PATH",
        windows=(
            "${ProgramFiles}\\Git\\bin\\bash.exe",
            "${ProgramFiles}\\Git\\usr\\bin\\bash.exe",
            "${ProgramFiles(x86)}\\Git\\bin\\bash.exe",
            "${ProgramFiles(x86)}\\Git\\usr\\bin\\bash.exe",
            "${SystemRoot}\\System32\\bash.exe",
        ),
        linux=(
            "/bin/bash",
            "/usr/bin/bash",
        ),
    )
)


def which() -> str:
    """Returns the path to the bash executable, or an empty string."""
    return executable.find(BASH)


def which_or_default() -> str:
    """Returns the path to bash, or the bare name `bash` for a PATH lookup."""
    return which() or BASH


def new(*args: str) -> BashCommand:
    """Creates a bash command with the given arguments passed through verbatim.

    Example:
        >>> new("--norc", "-e", "-o", "pipefail", "-c", "echo hello").run()
    """
    return BashCommand(which_or_default(), args)


def command(args: str) -> BashCommand:
    """Creates a bash command from a single, shell-quoted argument string.

    Example:
        >>> command("--norc -e -o pipefail -c 'echo hello'").run()
    """
    return BashCommand(which_or_default(), tuple(shlex.split(args)))


def file(path: str) -> BashCommand:
    """Creates a bash command that runs a script file in strict mode.

    When the resolved bash is the WSL one, the path is rewritten to its
    `/mnt/<drive>/...` form.
    """
    exe = which_or_default()
    if wsl.wsl_installed() and wsl.is_wsl_bash(exe):
        path = wsl.to_wsl_path(path)

    return BashCommand(exe, (*STRICT_FLAGS, path))


def script(text: str) -> BashCommand:
    """Creates a bash command from an inline script or a script file.

    Single-line text ending in `.sh` is treated as a file; anything else is
    passed to `bash -c`.

    Args:
        text: Script body, or path to a `.sh` file.

    Returns:
        The command, not yet started.
    """
    if "\n" not in text:
        text = text.strip()
        if text.endswith(".sh"):
            return file(text)

    return BashCommand(which_or_default(), (*STRICT_FLAGS, "-c", text))


def run(text: str) -> BashOutput:
    """Runs `script(text)` with stdout and stderr inherited."""
    return script(text).run()


def output(text: str) -> BashOutput:
    """Runs `script(text)` and captures stdout and stderr.

    Example:
        >>> out = output("/path/to/script.sh")
        >>> if out.code != 0:
        ...     ...
    """
    return script(text).output()
