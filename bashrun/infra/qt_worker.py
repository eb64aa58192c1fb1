import subprocess

from logly import logger
from PySide6.QtCore import QObject, Signal, Slot

from bashrun.core.command import BashCommand

_TIMEOUT_CODE = 124
_TIMEOUT_MESSAGE = b"timeout: command exceeded limit"


class BashWorker(QObject):
    """Runs a bash command with captured output in a background Qt thread.

    The worker is meant to be moved to a `QThread` and started via a signal/slot.
    """

    finished = Signal(bytes, bytes, int)
    finished_with_job = Signal(int, bytes, bytes, int)

    def __init__(self, command: BashCommand, timeout_sec: int = 60, job_id: int = 0):
        super().__init__()
        self._command = command.with_timeout(timeout_sec)
        self._job_id = job_id

    def _emit(self, stdout: bytes, stderr: bytes, code: int) -> None:
        self.finished.emit(stdout, stderr, code)
        self.finished_with_job.emit(self._job_id, stdout, stderr, code)

    @Slot()
    def run(self):
        """Executes the configured command and emits `finished`."""
        try:
            logger.info(f"Starting bash job={self._job_id} timeout={self._command.timeout}s")
            result = self._command.output()
            self._emit(result.stdout, result.stderr, result.code)

        except subprocess.TimeoutExpired:
            logger.warning(f"Bash job={self._job_id} timed out")
            self._emit(b"", _TIMEOUT_MESSAGE, _TIMEOUT_CODE)
        except Exception as e:
            logger.exception("Bash execution failed")
            self._emit(b"", str(e).encode("utf-8", errors="replace"), 1)
