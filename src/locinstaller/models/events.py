"""Output events produced from installer output and consumed by the UI context.

Events are immutable once created. The worker hands them to the update
queue and the UI context applies them in the order they were produced.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from locinstaller.models.status import EventKind


class _Event(BaseModel):
    """Base for all output events."""

    model_config = ConfigDict(frozen=True)

    @property
    def is_terminal(self) -> bool:
        return False


class LogLine(_Event):
    """Append a line to the installation log."""

    kind: Literal[EventKind.LOG_LINE] = EventKind.LOG_LINE
    text: str = Field(..., description="Line appended verbatim")


class LogLineReplace(_Event):
    """Replace the last log line (overwritten transfer progress)."""

    kind: Literal[EventKind.LOG_LINE_REPLACE] = EventKind.LOG_LINE_REPLACE
    text: str = Field(..., description="Replacement for the last log line")


class ProgressUpdate(_Event):
    """Drive the progress indicator."""

    kind: Literal[EventKind.PROGRESS_UPDATE] = EventKind.PROGRESS_UPDATE
    percent: int = Field(..., ge=0, le=100, description="Percentage completion (0-100)")
    message: str = Field(..., description="Text shown on the progress indicator")


class StatusUpdate(_Event):
    """Short human-readable phase description."""

    kind: Literal[EventKind.STATUS_UPDATE] = EventKind.STATUS_UPDATE
    message: str = Field(..., description="Status label text")
    marks_complete: bool = Field(
        default=False,
        description="Installer reported success; reveal the finish affordance",
    )


class ErrorNotice(_Event):
    """Fatal-looking line or failure description. Does not stop the worker."""

    kind: Literal[EventKind.ERROR_NOTICE] = EventKind.ERROR_NOTICE
    message: str = Field(..., description="Human-readable error message")


class InstallSucceeded(_Event):
    """Terminal event: installer exited with an accepted code."""

    kind: Literal[EventKind.INSTALL_SUCCEEDED] = EventKind.INSTALL_SUCCEEDED
    exit_code: int = Field(0, description="Accepted process exit code (0, 23 or 24)")

    @property
    def is_terminal(self) -> bool:
        return True


class InstallFailed(_Event):
    """Terminal event: installer failed or could not be started."""

    kind: Literal[EventKind.INSTALL_FAILED] = EventKind.INSTALL_FAILED
    exit_code: Optional[int] = Field(
        None, description="Process exit code, None when the process never started"
    )

    @property
    def is_terminal(self) -> bool:
        return True


OutputEvent = Annotated[
    Union[
        LogLine,
        LogLineReplace,
        ProgressUpdate,
        StatusUpdate,
        ErrorNotice,
        InstallSucceeded,
        InstallFailed,
    ],
    Field(discriminator="kind"),
]
