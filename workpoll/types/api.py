"""
API request and response type definitions.
"""

from datetime import timedelta
from uuid import UUID

from pydantic import BaseModel, Field

from workpoll.types.work import Done


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = "UP"


class Duration(BaseModel):
    """Span of time on the wire: whole seconds plus nanoseconds."""

    secs: int = Field(..., ge=0)
    nanos: int = Field(default=0, ge=0, lt=1_000_000_000)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Duration":
        whole = int(seconds)
        return cls(secs=whole, nanos=round((seconds - whole) * 1_000_000_000))

    def total_seconds(self) -> float:
        return self.secs + self.nanos / 1_000_000_000

    def to_timedelta(self) -> timedelta:
        return timedelta(seconds=self.secs, microseconds=self.nanos // 1000)


class WorkOutput(BaseModel):
    """Final result of a completed work item."""

    work_id: UUID
    duration: Duration = Field(..., description="Total duration assigned to the work")
    nb_get_call: int = Field(..., ge=0, description="Polls observed while pending")

    @classmethod
    def from_done(cls, done: Done) -> "WorkOutput":
        """Build the wire payload from a registry snapshot."""
        return cls(
            work_id=done.work_id,
            duration=Duration.from_seconds(done.duration_seconds),
            nb_get_call=done.poll_count,
        )
