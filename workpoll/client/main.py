"""
Command-line polling client.

Submits one job to the configured server and waits for the result.
"""

import asyncio
import logging
import time

from workpoll.client.errors import PollingError
from workpoll.client.user_agent import make_user_agent, run_work
from workpoll.config import get_settings
from workpoll.observability.logging import setup_logging
from workpoll.observability.tracing import setup_tracing

logger = logging.getLogger(__name__)


async def run_async() -> int:
    """
    Run one submission against ``client_base_url``.

    Returns:
        Process exit code.
    """
    settings = get_settings()
    setup_logging()
    setup_tracing()

    started = time.monotonic()

    async with make_user_agent(settings, base_url=settings.client_base_url) as client:
        try:
            output = await run_work(client)
        except PollingError as e:
            logger.error(f"Polling failed: {e}")
            return 1

    logger.info(
        "Result received",
        extra={
            "work_id": str(output.work_id),
            "duration_seconds": output.duration.total_seconds(),
            "nb_get_call": output.nb_get_call,
            "elapsed_seconds": round(time.monotonic() - started, 3),
        },
    )
    return 0


def run() -> None:
    """Run the client."""
    raise SystemExit(asyncio.run(run_async()))


if __name__ == "__main__":
    run()
