"""
Type definitions for the work polling service.
Contains registry records, poll outcomes and wire payloads.
"""

from workpoll.types.api import Duration, HealthResponse, WorkOutput
from workpoll.types.work import (
    Done,
    NotFound,
    Pending,
    PollResult,
    Submission,
    WorkItem,
)

__all__ = [
    # API types
    "Duration",
    "HealthResponse",
    "WorkOutput",
    # Work types
    "WorkItem",
    "Submission",
    "Pending",
    "Done",
    "NotFound",
    "PollResult",
]
