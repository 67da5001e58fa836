"""Status enums for installation sessions."""

from enum import Enum


class SessionState(str, Enum):
    """Installation session lifecycle.

    State transitions:
    idle → running → succeeded
              ↓
            failed

    Each session moves out of running exactly once. A retry is a new session.
    """

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SUCCEEDED, SessionState.FAILED)


class EventKind(str, Enum):
    """Discriminator values for OutputEvent models."""

    LOG_LINE = "log_line"
    LOG_LINE_REPLACE = "log_line_replace"
    PROGRESS_UPDATE = "progress_update"
    STATUS_UPDATE = "status_update"
    ERROR_NOTICE = "error_notice"
    INSTALL_SUCCEEDED = "install_succeeded"
    INSTALL_FAILED = "install_failed"
