"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class WorkState(StrEnum):
    """
    Work item lifecycle states.

    State transitions:
    - PENDING -> DONE (completion time reached)

    DONE is terminal. An identifier that was never issued has no state.
    """

    PENDING = "pending"
    DONE = "done"


class PollOutcome(StrEnum):
    """Outcome labels of a poll, as recorded in metrics and logs."""

    PENDING = "pending"
    DONE = "done"
    NOT_FOUND = "not_found"


# Default values
DEFAULT_MIN_DURATION_SECONDS = 1
DEFAULT_MAX_DURATION_SECONDS = 20
DEFAULT_PENDING_RETRY_AFTER_SECONDS = 1

# API paths
HEALTH_PATH = "/health"
START_WORK_PATH = "/start_work"
WORK_PATH_TEMPLATE = "/work/{work_id}"

# Header names
RETRY_AFTER_HEADER = "Retry-After"
LOCATION_HEADER = "Location"

# Statuses that carry a wait hint worth honoring
RETRYABLE_STATUS_CODES = frozenset({429, 503, 301, 302, 303, 307})

# Statuses the generic redirect policy may follow
FOLLOWABLE_REDIRECT_CODES = frozenset({301, 302, 307, 308})

# Metrics names
METRIC_WORK_SUBMITTED = "work_submitted_total"
METRIC_WORK_POLLS = "work_polls_total"
METRIC_WORK_ITEMS = "work_items_tracked"
METRIC_WORK_DURATION = "work_duration_seconds"
METRIC_API_REQUESTS = "api_requests_total"
METRIC_API_LATENCY = "api_request_latency_seconds"

# Trace span names
SPAN_FOLLOW_RETRY_AFTER = "follow_retry_after"


def work_path(work_id: object) -> str:
    """Path of the status resource for a work item."""
    return WORK_PATH_TEMPLATE.format(work_id=work_id)
