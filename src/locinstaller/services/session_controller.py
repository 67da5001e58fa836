"""Session controller: owns the installation session and drains its events."""

from typing import List, Optional
import logging

from locinstaller.api.models import ProgressSnapshot
from locinstaller.models.events import (
    ErrorNotice,
    InstallFailed,
    InstallSucceeded,
    OutputEvent,
    StatusUpdate,
)
from locinstaller.models.session import Command, InstallSession
from locinstaller.models.status import SessionState
from locinstaller.services.progress_view import ProgressView
from locinstaller.services.update_queue import UpdateQueue
from locinstaller.services.worker import DEFAULT_MAX_LINE_LENGTH, InstallWorker


class SessionController:
    """Singleton controller for installation sessions.

    Manages:
    - The canonical InstallSession (at most one running at a time)
    - The worker thread and its update queue
    - The progress view the drained events are applied to

    Every method except wait() must be called from the UI context (the
    service event loop). The worker never touches session state; it posts
    events that drain() applies.
    """

    _instance: Optional["SessionController"] = None

    def __new__(cls, *args, **kwargs):
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        """Initialize session controller (only once due to singleton).

        Args:
            max_line_length: Passed to each install worker
        """
        if self._initialized:
            return

        self.logger = logging.getLogger("locinstaller.session")
        self.max_line_length = max_line_length

        self._session: Optional[InstallSession] = None
        self._worker: Optional[InstallWorker] = None
        self._updates = UpdateQueue()
        self._view = ProgressView()

        self._initialized = True
        self.logger.info("SessionController initialized")

    @property
    def session(self) -> Optional[InstallSession]:
        return self._session

    @property
    def view(self) -> ProgressView:
        return self._view

    def is_running(self) -> bool:
        return self._session is not None and self._session.is_running

    def prepare(
        self, command: Command, display_command: Optional[str] = None
    ) -> Optional[InstallSession]:
        """Create a fresh idle session for the confirmation step.

        Args:
            command: Opaque command string or argv
            display_command: Redacted command text for logs

        Returns:
            The new session, or None while another session is running
        """
        if self.is_running():
            self.logger.warning("Installation already running, not preparing a new session")
            return None

        self._session = InstallSession(command=command, display_command=display_command)
        self._worker = None
        self._updates = UpdateQueue()
        self._view = ProgressView()
        self.logger.info(f"Prepared session: {self._session.describe_command()}")
        return self._session

    def start(
        self, command: Optional[Command] = None, display_command: Optional[str] = None
    ) -> bool:
        """Start the installer for a new session.

        Args:
            command: Command for a new session; None starts the prepared one
            display_command: Redacted command text for logs

        Returns:
            True if a worker was started, False if one is already running

        Raises:
            ValueError: If no command is given and no session is prepared
        """
        if self.is_running():
            self.logger.info("Installation already started")
            return False

        if command is not None:
            self.prepare(command, display_command)
        elif self._session is None:
            raise ValueError("No installation command to start")
        elif self._session.is_finished:
            self.prepare(self._session.command, self._session.display_command)

        session = self._session
        # Running flag is set before the thread exists.
        session.mark_running()
        self._worker = InstallWorker(
            session.command, self._updates, max_line_length=self.max_line_length
        )
        self.logger.info(f"Starting installation: {session.describe_command()}")

        try:
            self._worker.start()
        except RuntimeError as e:
            self.logger.error(f"Failed to create installation thread: {e}", exc_info=True)
            self._view.apply(ErrorNotice(message=f"Failed to create installation thread: {e}"))
            session.finish(succeeded=False, exit_code=None)
            return False

        return True

    def drain(self) -> List[OutputEvent]:
        """Apply every queued event in production order.

        Returns:
            The events drained, oldest first
        """
        events = self._updates.drain()
        for event in events:
            self._apply(event)
        return events

    def _apply(self, event: OutputEvent) -> None:
        self._view.apply(event)
        session = self._session

        if isinstance(event, StatusUpdate) and event.marks_complete:
            if session is not None and session.is_running:
                session.complete = True
                self.logger.info("Installer reported success, marking complete")
        elif isinstance(event, (InstallSucceeded, InstallFailed)):
            if session is None or not session.is_running:
                self.logger.warning(f"Ignoring unexpected terminal event: {event.kind.value}")
                return
            if isinstance(event, InstallSucceeded):
                session.finish(succeeded=True, exit_code=event.exit_code)
            else:
                session.finish(succeeded=False, exit_code=event.exit_code)
            self.logger.info(
                f"Session finished: state={session.state.value}, exit_code={session.exit_code}"
            )

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread to exit.

        Returns:
            True if no worker is running afterwards
        """
        if self._worker is None:
            return True
        return self._worker.join(timeout)

    def get_status(self) -> ProgressSnapshot:
        """Get current status for GET /progress endpoint."""
        session = self._session
        running = session is not None and session.is_running
        complete = session is not None and session.complete
        return ProgressSnapshot(
            state=session.state if session else SessionState.IDLE,
            complete=complete,
            progress=self._view.percent,
            progress_text=self._view.progress_text,
            status=self._view.status,
            error=self._view.last_error,
            exit_code=session.exit_code if session else None,
            log_lines=len(self._view.log_lines),
            command=session.describe_command() if session else None,
            can_install=not running and not complete,
            can_finish=complete,
        )

    def get_log(self) -> str:
        """Full installation log text, one line per entry."""
        return self._view.log_text

    def reset(self) -> None:
        """Forget the current session (no-op while running)."""
        if self.is_running():
            self.logger.warning("Cannot reset while installation is running")
            return
        self._session = None
        self._worker = None
        self._updates = UpdateQueue()
        self._view = ProgressView()
        self.logger.info("Session reset")
