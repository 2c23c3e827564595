"""
Polling user agent.

Builds an ``httpx.AsyncClient`` whose transport stack is::

    RetryAfterTransport -> RedirectTransport -> network transport

and drives a work submission through it.
"""

import logging
from typing import Any

import httpx

from workpoll.client.errors import WorkFailed
from workpoll.client.redirect import RedirectTransport
from workpoll.client.retry import RetryAfterTransport
from workpoll.config import Settings, get_settings
from workpoll.constants import START_WORK_PATH
from workpoll.types.api import WorkOutput

logger = logging.getLogger(__name__)


def make_user_agent(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    base_url: str | None = None,
    **retry_options: Any,
) -> httpx.AsyncClient:
    """
    Create an HTTP client that follows Retry-After hints.

    The client itself never follows redirects; the transport stack does.

    Args:
        settings: Source of the safety bounds and timeout. Defaults to the
            cached application settings.
        transport: Network transport to wrap. Defaults to
            ``httpx.AsyncHTTPTransport``.
        base_url: Base URL of the client. Empty when omitted.
        **retry_options: Overrides forwarded to RetryAfterTransport
            (``max_attempts``, ``max_elapsed``, ``max_wait``, ``sleep``, ``clock``).

    Returns:
        httpx.AsyncClient: The configured client. The caller closes it.
    """
    settings = settings or get_settings()

    options: dict[str, Any] = {
        "max_attempts": settings.client_max_attempts,
        "max_elapsed": settings.client_max_elapsed_seconds,
        "max_wait": settings.client_max_wait_seconds,
    }
    options.update(retry_options)

    stack = RetryAfterTransport(
        RedirectTransport(
            transport or httpx.AsyncHTTPTransport(),
            max_redirects=settings.client_max_redirects,
        ),
        **options,
    )

    return httpx.AsyncClient(
        transport=stack,
        base_url=base_url or "",
        follow_redirects=False,
        timeout=settings.client_timeout_seconds,
    )


async def run_work(client: httpx.AsyncClient, url: str = START_WORK_PATH) -> WorkOutput:
    """
    Submit a job and wait for its result.

    Args:
        client: A client built by make_user_agent().
        url: Submission URL, relative to the client's base URL.

    Returns:
        WorkOutput: The final result.

    Raises:
        WorkFailed: If the final response is not a 200 result.
        ClientTimeout: If the retry budget ran out.
    """
    response = await client.post(url)

    if response.status_code != httpx.codes.OK:
        logger.warning(
            "Work ended without a result",
            extra={"status": response.status_code, "url": str(response.url)},
        )
        raise WorkFailed(response.status_code)

    output = WorkOutput.model_validate(response.json())
    logger.info(
        "Work completed",
        extra={
            "work_id": str(output.work_id),
            "duration_seconds": output.duration.total_seconds(),
            "nb_get_call": output.nb_get_call,
        },
    )
    return output
