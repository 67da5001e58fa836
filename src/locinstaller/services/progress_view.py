"""UI-side model that drained output events are applied to."""

from typing import List, Optional

from locinstaller.models.events import (
    ErrorNotice,
    LogLine,
    LogLineReplace,
    OutputEvent,
    ProgressUpdate,
    StatusUpdate,
)

INITIAL_STATUS = "Starting installation..."


class ProgressView:
    """Log buffer, progress bar and status label for one session.

    Only touched from the UI context.
    """

    def __init__(self):
        self.log_lines: List[str] = []
        self.percent: int = 0
        self.progress_text: str = ""
        self.status: str = INITIAL_STATUS
        self.errors: List[str] = []

    @property
    def last_error(self) -> Optional[str]:
        return self.errors[-1] if self.errors else None

    @property
    def log_text(self) -> str:
        return "".join(f"{line}\n" for line in self.log_lines)

    def apply(self, event: OutputEvent) -> None:
        """Apply the visual effect of one event. Terminal events have none."""
        if isinstance(event, LogLine):
            self.log_lines.append(event.text)
        elif isinstance(event, LogLineReplace):
            if self.log_lines:
                self.log_lines[-1] = event.text
            else:
                self.log_lines.append(event.text)
        elif isinstance(event, ProgressUpdate):
            self.percent = event.percent
            self.progress_text = event.message
        elif isinstance(event, StatusUpdate):
            self.status = event.message
        elif isinstance(event, ErrorNotice):
            self.errors.append(event.message)
