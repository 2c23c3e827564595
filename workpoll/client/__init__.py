"""
Polling client module.
Contains the Retry-After retry engine, the redirect policy and the user agent.
"""

from workpoll.client.errors import (
    ClientTimeout,
    NonRetryableRequest,
    PollingError,
    WorkFailed,
)
from workpoll.client.redirect import RedirectTransport
from workpoll.client.retry import (
    RetryAfterTransport,
    is_retryable,
    parse_retry_after,
    retry_after_seconds,
)
from workpoll.client.user_agent import make_user_agent, run_work

__all__ = [
    "PollingError",
    "NonRetryableRequest",
    "ClientTimeout",
    "WorkFailed",
    "RetryAfterTransport",
    "RedirectTransport",
    "parse_retry_after",
    "retry_after_seconds",
    "is_retryable",
    "make_user_agent",
    "run_work",
]
