"""
In-memory work registry.

Owns every work item and implements the submit/poll state machine. All
reads and writes of the item map happen under a single lock so that a poll
cannot race the completion boundary or another poll on the same id.
"""

import logging
import random
import threading
import time
import uuid
from collections.abc import Callable
from uuid import UUID

from workpoll.constants import (
    DEFAULT_MAX_DURATION_SECONDS,
    DEFAULT_MIN_DURATION_SECONDS,
    DEFAULT_PENDING_RETRY_AFTER_SECONDS,
    WorkState,
)
from workpoll.types.work import Done, NotFound, Pending, PollResult, Submission, WorkItem

logger = logging.getLogger(__name__)


class WorkRegistry:
    """
    Registry of accepted work items.

    Time comes from ``clock`` (monotonic seconds) and job durations from
    ``duration_picker``; both can be replaced for deterministic tests.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        duration_picker: Callable[[], int] | None = None,
        min_duration: int = DEFAULT_MIN_DURATION_SECONDS,
        max_duration: int = DEFAULT_MAX_DURATION_SECONDS,
        pending_retry_after: int = DEFAULT_PENDING_RETRY_AFTER_SECONDS,
    ):
        """
        Initialize the registry.

        Args:
            clock: Monotonic time source in seconds.
            duration_picker: Returns the duration of a new job in whole
                seconds. Defaults to a uniform draw in [min_duration, max_duration].
            min_duration: Lower bound of the default duration draw.
            max_duration: Upper bound (inclusive) of the default duration draw.
            pending_retry_after: Wait hint returned for pending polls.
        """
        if min_duration < 0 or max_duration < min_duration:
            raise ValueError(
                f"Invalid duration range [{min_duration}, {max_duration}]"
            )

        self._clock = clock
        self._rng = random.Random()
        self._duration_picker = duration_picker or (
            lambda: self._rng.randint(min_duration, max_duration)
        )
        self._pending_retry_after = pending_retry_after
        self._items: dict[UUID, WorkItem] = {}
        self._lock = threading.Lock()

    def submit(self) -> Submission:
        """
        Accept a new job.

        Returns:
            Submission with the new id and a wait hint of half the duration.
        """
        duration = self._duration_picker()

        with self._lock:
            work_id = uuid.uuid4()
            while work_id in self._items:
                work_id = uuid.uuid4()

            self._items[work_id] = WorkItem(
                work_id=work_id,
                completes_at=self._clock() + duration,
                duration_seconds=duration,
            )

        logger.info(
            "Work submitted",
            extra={"work_id": str(work_id), "duration_seconds": duration},
        )

        return Submission(
            work_id=work_id,
            retry_after_seconds=duration // 2,
            duration_seconds=duration,
        )

    def poll(self, work_id: UUID) -> PollResult:
        """
        Look up a work item.

        A poll observed while the item is pending increments its poll count.
        A poll observed after completion leaves the item untouched.

        Args:
            work_id: Identifier returned by submit().

        Returns:
            Pending, Done or NotFound.
        """
        with self._lock:
            item = self._items.get(work_id)

            if item is None:
                return NotFound(work_id=work_id)

            if item.state(self._clock()) is WorkState.PENDING:
                item.poll_count += 1
                return Pending(
                    work_id=work_id,
                    retry_after_seconds=self._pending_retry_after,
                )

            return Done(
                work_id=work_id,
                duration_seconds=item.duration_seconds,
                poll_count=item.poll_count,
            )

    def count(self) -> int:
        """Number of tracked work items."""
        with self._lock:
            return len(self._items)
