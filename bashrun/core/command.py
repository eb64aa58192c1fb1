import dataclasses
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

from logly import logger

from . import host

_CREATE_NO_WINDOW: Final[int] = 0x08000000


@dataclass(frozen=True, slots=True)
class BashOutput:
    """Result of a finished process.

    Attributes:
        code: Exit code.
        stdout: Captured standard output (empty when streams were inherited).
        stderr: Captured standard error (empty when streams were inherited).
    """

    code: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.code == 0

    def text(self, stream: Literal["stdout", "stderr"] = "stdout") -> str:
        """Decodes a captured stream as UTF-8, replacing invalid bytes."""
        return getattr(self, stream).decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class BashCommand:
    """An executable plus its arguments, ready to run.

    Instances are immutable; the `with_*` helpers return modified copies.
    """

    executable: str
    args: tuple[str, ...] = ()
    cwd: str | os.PathLike[str] | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    check: bool = False

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def with_cwd(self, cwd: str | os.PathLike[str]) -> "BashCommand":
        return dataclasses.replace(self, cwd=cwd)

    def with_env(self, env: Mapping[str, str]) -> "BashCommand":
        return dataclasses.replace(self, env=env)

    def with_timeout(self, timeout: float) -> "BashCommand":
        return dataclasses.replace(self, timeout=timeout)

    def with_check(self, check: bool = True) -> "BashCommand":
        """Returns a copy that raises on a non-zero exit code."""
        return dataclasses.replace(self, check=check)

    def _run_kwargs(self) -> dict:
        kwargs: dict = {}
        if self.cwd is not None:
            kwargs["cwd"] = self.cwd
        if self.env is not None:
            kwargs["env"] = dict(self.env)
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.check:
            kwargs["check"] = True
        return kwargs

    def run(self) -> BashOutput:
        """Runs the command with stdout and stderr inherited from this process.

        Raises:
            OSError: The process could not be started.
            subprocess.TimeoutExpired: The timeout elapsed.
            subprocess.CalledProcessError: The exit code was non-zero and
                `check` is set.
        """
        logger.info(f"Running argv={' '.join(self.argv)}")
        result = subprocess.run(self.argv, **self._run_kwargs())
        logger.info(f"Process finished returncode={result.returncode}")
        return BashOutput(code=result.returncode)

    def output(self) -> BashOutput:
        """Runs the command and captures stdout and stderr.

        Raises:
            OSError: The process could not be started.
            subprocess.TimeoutExpired: The timeout elapsed.
            subprocess.CalledProcessError: The exit code was non-zero and
                `check` is set.
        """
        logger.info(f"Running with captured output argv={' '.join(self.argv)}")
        kwargs = self._run_kwargs()
        kwargs["capture_output"] = True

        if host.is_windows():
            kwargs["creationflags"] = _CREATE_NO_WINDOW

        result = subprocess.run(self.argv, **kwargs)
        logger.info(f"Process finished returncode={result.returncode}")
        return BashOutput(
            code=result.returncode, stdout=result.stdout, stderr=result.stderr
        )
