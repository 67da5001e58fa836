"""Install worker: runs the core installer and turns its output into events."""

import subprocess
import threading
from typing import IO, Iterator, Optional
import logging

from locinstaller.models.events import (
    ErrorNotice,
    InstallFailed,
    InstallSucceeded,
    LogLine,
    OutputEvent,
    ProgressUpdate,
    StatusUpdate,
)
from locinstaller.models.session import Command
from locinstaller.models.status import SessionState
from locinstaller.services.classifier import COMPLETE_PROGRESS_MESSAGE, classify_line
from locinstaller.services.update_queue import UpdateQueue

# 23/24 are rsync partial-transfer warnings reported by the core installer.
SUCCESS_EXIT_CODES = frozenset({0, 23, 24})

DEFAULT_MAX_LINE_LENGTH = 2047


def clean_line(raw: str) -> Optional[str]:
    """Apply carriage-return overwrite semantics to one output line.

    Only the text after the last '\\r' is kept. If that remainder is empty
    or starts with whitespace the line is a cursor artifact and dropped.

    Returns:
        Cleaned line, or None if it should be discarded
    """
    cr = raw.rfind("\r")
    if cr < 0:
        return raw
    tail = raw[cr + 1:]
    if not tail or tail[0].isspace():
        return None
    return tail


def is_success_exit(exit_code: int) -> bool:
    return exit_code in SUCCESS_EXIT_CODES


class InstallWorker:
    """Runs one installer command on a dedicated thread.

    State machine: idle → running → succeeded | failed. Each worker runs at
    most once; a retry needs a new worker.

    The worker only talks to the UI through the update queue. It posts
    exactly one terminal event (InstallSucceeded or InstallFailed) and it
    is always the last event posted.
    """

    def __init__(
        self,
        command: Command,
        updates: UpdateQueue,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ):
        """Initialize install worker.

        Args:
            command: Opaque command string (run via the shell) or argv list
            updates: Queue receiving output events
            max_line_length: Longer output lines are truncated
        """
        self.logger = logging.getLogger("locinstaller.worker")
        self.command = command
        self.updates = updates
        self.max_line_length = max_line_length
        self.state = SessionState.IDLE
        self.exit_code: Optional[int] = None
        self.line_count = 0
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self) -> bool:
        """Start the worker thread.

        Returns:
            True if started, False if this worker was already started
        """
        with self._lock:
            if self.state != SessionState.IDLE:
                self.logger.warning(f"Worker already {self.state.value}, ignoring start")
                return False
            self.state = SessionState.RUNNING

        # Daemon thread: shutdown does not wait for, or kill, the installer.
        self._thread = threading.Thread(
            target=self._run, name="install-worker", daemon=True
        )
        self._thread.start()
        self.logger.info("Install worker thread started")
        return True

    def run(self) -> None:
        """Run the installer synchronously on the calling thread."""
        with self._lock:
            if self.state != SessionState.IDLE:
                self.logger.warning(f"Worker already {self.state.value}, ignoring run")
                return
            self.state = SessionState.RUNNING
        self._run()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread.

        Returns:
            True if the thread has finished (or never started)
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _post(self, *events: OutputEvent) -> None:
        self.updates.put_all(events)

    def _run(self) -> None:
        self._post(
            StatusUpdate(message="Preparing installation..."),
            ProgressUpdate(percent=0, message="Starting..."),
        )

        try:
            process = self._spawn()
        except OSError as e:
            self.logger.error(f"Failed to start installation process: {e}")
            self._fail(
                None, f"Failed to start installation process: {e.strerror or e}"
            )
            return
        except ValueError as e:
            # Popen rejects arguments it cannot pass to exec (e.g. embedded NUL).
            self.logger.error(f"Invalid installer command: {e}")
            self._fail(None, f"Failed to start installation process: {e}")
            return

        self.logger.info(f"Installer started (PID: {process.pid})")
        try:
            with process.stdout:
                for line in self._read_lines(process.stdout):
                    self._post(*classify_line(line))
            exit_code = process.wait()
        except Exception as e:
            self.logger.error(f"Reading installer output failed: {e}", exc_info=True)
            exit_code = process.poll()
            self._fail(exit_code, f"Installation aborted: {e}")
            return

        self.logger.info(f"Installer finished with exit code: {exit_code}")
        self._finish(exit_code)

    def _spawn(self) -> subprocess.Popen:
        shell = isinstance(self.command, str)
        return subprocess.Popen(
            self.command,
            shell=shell,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )

    def _read_lines(self, stream: IO[bytes]) -> Iterator[str]:
        """Yield cleaned, decoded lines as the installer produces them."""
        for raw in iter(stream.readline, b""):
            self.line_count += 1
            text = raw.decode("utf-8", errors="replace").rstrip("\n")

            line = clean_line(text)
            if line is None:
                continue

            if len(line) > self.max_line_length:
                self.logger.warning(
                    f"Line {self.line_count} truncated from {len(line)} "
                    f"to {self.max_line_length} characters"
                )
                line = line[:self.max_line_length]

            self.logger.debug(f"[INSTALLER:{self.line_count:03d}] {line}")
            yield line

    def _finish(self, exit_code: int) -> None:
        if is_success_exit(exit_code):
            self.logger.info(f"Installation SUCCESSFUL (exit code: {exit_code})")
            self._succeed(exit_code)
        else:
            self.logger.error(f"Installation FAILED (exit code: {exit_code})")
            self._fail(exit_code, f"Installation failed with exit code {exit_code}")

    def _succeed(self, exit_code: int) -> None:
        self.exit_code = exit_code
        self.state = SessionState.SUCCEEDED
        self._post(
            LogLine(text="=== Installation completed successfully! ==="),
            ProgressUpdate(percent=100, message=COMPLETE_PROGRESS_MESSAGE),
            InstallSucceeded(exit_code=exit_code),
        )

    def _fail(self, exit_code: Optional[int], message: str) -> None:
        self.exit_code = exit_code
        self.state = SessionState.FAILED
        self._post(ErrorNotice(message=message), InstallFailed(exit_code=exit_code))
