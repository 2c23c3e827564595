"""
Work submission and polling routes.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, Response

from workpoll.api.dependencies import Registry
from workpoll.constants import (
    LOCATION_HEADER,
    RETRY_AFTER_HEADER,
    START_WORK_PATH,
    WORK_PATH_TEMPLATE,
    PollOutcome,
    work_path,
)
from workpoll.observability.metrics import get_metrics
from workpoll.types.api import WorkOutput
from workpoll.types.work import Done, NotFound, Pending

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Work"])


def _see_other(work_id: UUID, retry_after: int) -> Response:
    """Redirect to the status resource with a wait hint."""
    return Response(
        status_code=status.HTTP_303_SEE_OTHER,
        headers={
            LOCATION_HEADER: work_path(work_id),
            RETRY_AFTER_HEADER: str(retry_after),
        },
    )


@router.post(
    START_WORK_PATH,
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=Response,
    summary="Start work",
    description="Accept a long-running job and redirect to its status resource.",
    responses={303: {"description": "Work accepted; poll the Location after Retry-After seconds"}},
)
async def start_work(registry: Registry) -> Response:
    """
    Submit a new job.

    No request body is read.

    Args:
        registry: The work registry.

    Returns:
        303 See Other with Location and Retry-After headers.
    """
    submission = registry.submit()

    get_metrics().record_work_submitted(
        duration_seconds=submission.duration_seconds,
        tracked=registry.count(),
    )

    return _see_other(submission.work_id, submission.retry_after_seconds)


@router.get(
    WORK_PATH_TEMPLATE,
    response_model=WorkOutput,
    summary="Poll work",
    description="Redirect to itself while pending, return the result once done.",
    responses={
        303: {"description": "Still pending; retry after the hinted delay"},
        404: {"description": "Unknown work id"},
    },
)
async def get_work(work_id: str, registry: Registry) -> Response:
    """
    Poll a work item.

    Identifiers are opaque to clients. One that is not a UUID was never
    issued and is answered like any other unknown id.

    Args:
        work_id: The work id from the path.
        registry: The work registry.

    Returns:
        303 while pending, 200 with the result when done, 404 if unknown.
    """
    metrics = get_metrics()

    try:
        parsed_id = UUID(work_id)
    except ValueError:
        parsed_id = None

    result = registry.poll(parsed_id) if parsed_id is not None else None

    match result:
        case None | NotFound():
            logger.info("Unknown work polled", extra={"work_id": work_id})
            metrics.record_work_poll(PollOutcome.NOT_FOUND)
            return Response(status_code=status.HTTP_404_NOT_FOUND)

        case Pending(retry_after_seconds=retry_after):
            logger.info(
                "Work pending",
                extra={"work_id": str(result.work_id), "retry_after": retry_after},
            )
            metrics.record_work_poll(PollOutcome.PENDING)
            return _see_other(result.work_id, retry_after)

        case Done():
            logger.info(
                "Work done",
                extra={"work_id": str(result.work_id), "nb_get_call": result.poll_count},
            )
            metrics.record_work_poll(PollOutcome.DONE)
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content=WorkOutput.from_done(result).model_dump(mode="json"),
            )
