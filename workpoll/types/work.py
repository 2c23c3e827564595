"""
Work-related type definitions for internal use.
"""

from dataclasses import dataclass
from uuid import UUID

from workpoll.constants import WorkState


@dataclass
class WorkItem:
    """
    One accepted job tracked by the registry.

    Only ``poll_count`` ever changes after creation.
    """

    work_id: UUID
    completes_at: float
    duration_seconds: int
    poll_count: int = 0

    def state(self, now: float) -> WorkState:
        """Lifecycle state at monotonic time ``now``."""
        if now < self.completes_at:
            return WorkState.PENDING
        return WorkState.DONE


@dataclass(frozen=True)
class Pending:
    """Poll outcome while the work is still running."""

    work_id: UUID
    retry_after_seconds: int


@dataclass(frozen=True)
class Done:
    """Poll outcome once the work has completed. A snapshot."""

    work_id: UUID
    duration_seconds: int
    poll_count: int


@dataclass(frozen=True)
class NotFound:
    """Poll outcome for an identifier that was never issued."""

    work_id: UUID


PollResult = Pending | Done | NotFound


@dataclass(frozen=True)
class Submission:
    """Result of accepting a new job."""

    work_id: UUID
    retry_after_seconds: int
    duration_seconds: int
