"""
Request metrics middleware.
"""

import time
from collections.abc import Callable

from fastapi import Request

from workpoll.observability.metrics import get_metrics


def create_metrics_middleware() -> Callable:
    """
    Create a middleware recording request count and latency per route.

    Returns:
        The middleware function.
    """

    async def metrics_middleware(request: Request, call_next: Callable):
        """Time the request and record it under its route template."""
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        # Route templates keep label cardinality bounded (/work/{work_id}).
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")

        get_metrics().record_api_request(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
            duration_seconds=duration,
        )
        return response

    return metrics_middleware
