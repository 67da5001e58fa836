"""Pydantic models for HTTP API responses."""

from typing import List, Optional
from pydantic import BaseModel, Field

from locinstaller.models.partition import Partition
from locinstaller.models.status import SessionState


class ProgressSnapshot(BaseModel):
    """Read-only view of the current installation session."""

    state: SessionState = Field(..., description="Session lifecycle state")
    complete: bool = Field(..., description="Finish affordance should be shown")
    progress: int = Field(..., ge=0, le=100, description="Percentage completion (0-100)")
    progress_text: str = Field(..., description="Text shown on the progress bar")
    status: str = Field(..., description="Human-readable phase description")
    error: Optional[str] = Field(None, description="Most recent error notice")
    exit_code: Optional[int] = Field(None, description="Installer exit code once finished")
    log_lines: int = Field(..., ge=0, description="Number of lines in the installation log")
    command: Optional[str] = Field(None, description="Command with passwords hidden")
    can_install: bool = Field(..., description="Install button may be enabled")
    can_finish: bool = Field(..., description="Finish button may be shown")


class ProgressResponse(BaseModel):
    """GET /api/v1.0/progress response.

    Returns current session snapshot with application-level status code.
    """

    code: int = Field(..., description="Application-level status code (200/500)")
    msg: str = Field(..., description="Status message or error description")
    data: ProgressSnapshot = Field(..., description="Session snapshot")


class SuccessResponse(BaseModel):
    """Success response for command endpoints."""

    code: int = Field(default=200, description="Application-level status code (200)")
    msg: str = Field(default="success", description="Success message")
    data: Optional[dict] = Field(None, description="Optional response data")


class ErrorResponse(BaseModel):
    """Error response for all endpoints.

    HTTP status code is always 200, real status in 'code' field.
    """

    code: int = Field(..., description="Application-level error code (404/409/500)")
    msg: str = Field(..., description="Error message")
    state: Optional[SessionState] = Field(None, description="Current session state")
    progress: Optional[int] = Field(None, description="Current progress")


class ListResponse(BaseModel):
    """GET /api/v1.0/sysinfo/{kind} response."""

    code: int = Field(default=200)
    msg: str = Field(default="success")
    data: List[str] = Field(default_factory=list, description="One entry per line")


class PartitionListResponse(BaseModel):
    """GET /api/v1.0/sysinfo/partitions response."""

    code: int = Field(default=200)
    msg: str = Field(default="success")
    data: List[Partition] = Field(default_factory=list, description="Partitions in script order")
