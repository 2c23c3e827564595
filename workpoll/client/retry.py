"""
Retry-After driven retry engine.

``RetryAfterTransport`` wraps another httpx transport and keeps re-issuing a
request for as long as the server answers with a retryable status carrying a
``Retry-After`` hint in whole seconds. A 303 See Other is followed with a GET
to its ``Location``; any other retryable status replays the request as is.
Because it sits at the transport level it always sees the raw response,
before any redirect handling above it.
"""

import asyncio
import logging
import re
import time
from collections.abc import Awaitable, Callable

import httpx

from workpoll.client.errors import ClientTimeout
from workpoll.client.requests import ensure_replayable, replay_request, see_other_request
from workpoll.constants import (
    RETRY_AFTER_HEADER,
    RETRYABLE_STATUS_CODES,
    SPAN_FOLLOW_RETRY_AFTER,
)
from workpoll.observability.tracing import get_tracer

logger = logging.getLogger(__name__)

_SECONDS_RE = re.compile(r"[0-9]+")


def parse_retry_after(value: str) -> int | None:
    """
    Parse a Retry-After value expressed in delay-seconds.

    HTTP-date values are not supported and yield None, like any other
    malformed value.
    """
    value = value.strip()
    if not _SECONDS_RE.fullmatch(value):
        return None
    return int(value)


def retry_after_seconds(response: httpx.Response) -> int | None:
    """
    Wait hint of a retryable response.

    Returns:
        The hinted delay, or None when the response is final.
    """
    if response.status_code not in RETRYABLE_STATUS_CODES:
        return None

    header = response.headers.get(RETRY_AFTER_HEADER)
    if header is None:
        return None

    seconds = parse_retry_after(header)
    if seconds is None:
        logger.warning(
            "Ignoring malformed Retry-After",
            extra={"status": response.status_code, "retry_after": header},
        )
    return seconds


def is_retryable(response: httpx.Response) -> bool:
    """Check whether the response asks the client to wait and try again."""
    return retry_after_seconds(response) is not None


class RetryAfterTransport(httpx.AsyncBaseTransport):
    """
    Transport that honors Retry-After on retryable responses.

    Safety bounds turn a never-ending chain into ClientTimeout:
    ``max_attempts`` caps the number of requests per call and
    ``max_elapsed`` caps the time spent, counting the next wait.
    ``max_wait`` optionally caps a single hinted wait.

    A retryable status other than 303 replays the request that produced it:
    the caller's request at first, the GET built for the Location after a
    303 hop.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        max_attempts: int = 64,
        max_elapsed: float = 60.0,
        max_wait: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._transport = transport
        self.max_attempts = max_attempts
        self.max_elapsed = max_elapsed
        self.max_wait = max_wait
        self._sleep = sleep
        self._clock = clock

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        ensure_replayable(request)

        with get_tracer().start_as_current_span(SPAN_FOLLOW_RETRY_AFTER) as span:
            span.set_attribute("http.url", str(request.url))
            response, attempts = await self._follow(request)
            span.set_attribute("workpoll.attempts", attempts)
            return response

    async def _follow(self, request: httpx.Request) -> tuple[httpx.Response, int]:
        """Drive the retry loop until a final response arrives."""
        started = self._clock()
        attempts = 1
        response = await self._transport.handle_async_request(request)

        while True:
            wait = retry_after_seconds(response)
            if wait is None:
                return response, attempts

            if self.max_wait is not None:
                wait = min(wait, self.max_wait)

            elapsed = self._clock() - started
            if attempts >= self.max_attempts or elapsed + wait > self.max_elapsed:
                await response.aclose()
                logger.warning(
                    "Retry budget exhausted",
                    extra={"url": str(request.url), "attempts": attempts, "elapsed": elapsed},
                )
                raise ClientTimeout(
                    f"No final response after {attempts} attempts in {elapsed:.1f}s",
                    attempts=attempts,
                    elapsed=elapsed,
                )

            if response.status_code == httpx.codes.SEE_OTHER:
                next_request = see_other_request(request, response)
            else:
                next_request = replay_request(request)

            await response.aclose()

            logger.info(
                "Waiting before retry",
                extra={
                    "status": response.status_code,
                    "retry_after": wait,
                    "next_url": str(next_request.url),
                    "attempt": attempts,
                },
            )
            await self._sleep(wait)

            request = next_request
            response = await self._transport.handle_async_request(request)
            attempts += 1

    async def aclose(self) -> None:
        await self._transport.aclose()
