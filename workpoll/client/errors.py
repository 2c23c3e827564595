"""
Client-side errors raised by the polling engine.
"""


class PollingError(Exception):
    """Base class for polling client failures."""


class NonRetryableRequest(PollingError):
    """The request body cannot be replayed, e.g. a streaming body."""


class ClientTimeout(PollingError):
    """The retry budget ran out before a final response arrived."""

    def __init__(self, message: str, attempts: int, elapsed: float):
        super().__init__(message)
        self.attempts = attempts
        self.elapsed = elapsed


class WorkFailed(PollingError):
    """The final response to a work submission was not a result."""

    def __init__(self, status_code: int):
        super().__init__(f"Work did not complete (final status {status_code})")
        self.status_code = status_code
