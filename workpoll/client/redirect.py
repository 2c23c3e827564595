"""
Constrained redirect policy sitting below the retry engine.
"""

import logging

import httpx

from workpoll.client.requests import replay_request, see_other_request
from workpoll.constants import (
    FOLLOWABLE_REDIRECT_CODES,
    LOCATION_HEADER,
    RETRY_AFTER_HEADER,
)

logger = logging.getLogger(__name__)


class RedirectTransport(httpx.AsyncBaseTransport):
    """
    Transport following plain redirects.

    Follows 301, 302, 307 and 308 responses that carry a Location and no
    Retry-After. A redirect with a Retry-After header, and any 303, is
    returned untouched so the retry engine above can read its headers.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport, max_redirects: int = 5):
        self._transport = transport
        self.max_redirects = max_redirects

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        redirects = 0
        response = await self._transport.handle_async_request(request)

        while self._should_follow(response):
            if redirects >= self.max_redirects:
                await response.aclose()
                raise httpx.TooManyRedirects(
                    "Exceeded maximum allowed redirects.", request=request
                )

            next_request = self._redirect_request(request, response)
            await response.aclose()

            logger.debug(
                "Following redirect",
                extra={"status": response.status_code, "next_url": str(next_request.url)},
            )

            request = next_request
            response = await self._transport.handle_async_request(request)
            redirects += 1

        return response

    @staticmethod
    def _should_follow(response: httpx.Response) -> bool:
        return (
            response.status_code in FOLLOWABLE_REDIRECT_CODES
            and LOCATION_HEADER in response.headers
            and RETRY_AFTER_HEADER not in response.headers
        )

    @staticmethod
    def _redirect_request(request: httpx.Request, response: httpx.Response) -> httpx.Request:
        # 301/302 downgrade non-GET requests to GET, as browsers do.
        if response.status_code in (301, 302) and request.method not in ("GET", "HEAD"):
            return see_other_request(request, response)

        return replay_request(request, request.url.join(response.headers[LOCATION_HEADER]))

    async def aclose(self) -> None:
        await self._transport.aclose()
