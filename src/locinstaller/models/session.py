"""Installation session model."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from locinstaller.models.status import SessionState

Command = Union[str, List[str]]


class InstallSession(BaseModel):
    """One attempt at running the external installer end to end.

    Only the session controller mutates a session, and only on the UI
    context. The worker reports through events.
    """

    command: Command = Field(
        ..., frozen=True, description="Opaque command string or argv handed to the worker"
    )
    display_command: Optional[str] = Field(
        None, frozen=True, description="Command text safe to show in logs (passwords hidden)"
    )
    state: SessionState = Field(default=SessionState.IDLE, description="Lifecycle state")
    exit_code: Optional[int] = Field(None, description="Set only at termination")
    complete: bool = Field(
        default=False, description="Finish affordance visible to navigation logic"
    )
    started_at: Optional[datetime] = Field(None, description="When the worker was started")
    finished_at: Optional[datetime] = Field(None, description="When the terminal event was applied")

    @field_validator("command")
    @classmethod
    def command_not_empty(cls, v):
        """Reject empty strings and empty argv lists."""
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("command must not be empty")
        elif not v:
            raise ValueError("command must not be empty")
        return v

    @property
    def is_running(self) -> bool:
        return self.state == SessionState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state.is_terminal

    def describe_command(self) -> str:
        """Text for log output; prefers the redacted form."""
        if self.display_command:
            return self.display_command
        if isinstance(self.command, str):
            return self.command
        return " ".join(self.command)

    def mark_running(self) -> None:
        """Transition idle → running.

        Raises:
            RuntimeError: If the session has already been started
        """
        if self.state != SessionState.IDLE:
            raise RuntimeError(f"Session cannot start from state {self.state.value}")
        self.state = SessionState.RUNNING
        self.started_at = datetime.now()

    def finish(self, succeeded: bool, exit_code: Optional[int]) -> None:
        """Transition running → succeeded/failed and reveal the finish affordance.

        Raises:
            RuntimeError: If the session is not running
        """
        if self.state != SessionState.RUNNING:
            raise RuntimeError(f"Session cannot finish from state {self.state.value}")
        self.state = SessionState.SUCCEEDED if succeeded else SessionState.FAILED
        self.exit_code = exit_code
        self.complete = True
        self.finished_at = datetime.now()
