"""
Builders for the follow-up requests issued by the client transports.
"""

import httpx

from workpoll.client.errors import NonRetryableRequest
from workpoll.constants import LOCATION_HEADER

# Headers that describe a request body and must not survive a switch to GET.
_BODY_HEADERS = ("Content-Length", "Content-Type", "Transfer-Encoding")


def ensure_replayable(request: httpx.Request) -> None:
    """
    Fail fast when the request body cannot be sent a second time.

    Raises:
        NonRetryableRequest: If the body is a stream that was not read.
    """
    if not isinstance(request.stream, httpx.ByteStream):
        raise NonRetryableRequest(
            "Request object is not replayable. Are you passing a streaming body?"
        )


def replay_request(request: httpx.Request, url: httpx.URL | None = None) -> httpx.Request:
    """
    Copy of the request with the same method, headers and body.

    Sent to ``url`` when given, in which case Host is recomputed from it.
    """
    headers = httpx.Headers(request.headers)
    if url is not None:
        headers.pop("Host", None)

    return httpx.Request(
        request.method,
        url or request.url,
        headers=headers,
        content=request.content,
        extensions=request.extensions,
    )


def see_other_request(request: httpx.Request, response: httpx.Response) -> httpx.Request:
    """
    GET request following a 303 See Other.

    Keeps the headers and extensions (timeout included) of ``request``,
    drops its method and body. The Location is resolved against the
    request URL.
    """
    location = response.headers.get(LOCATION_HEADER)
    url = request.url.join(location) if location else request.url

    headers = httpx.Headers(request.headers)
    for name in (*_BODY_HEADERS, "Host"):
        headers.pop(name, None)

    return httpx.Request(
        "GET",
        url,
        headers=headers,
        extensions=request.extensions,
    )
