"""Email queue processing API.

POST triggers a batch manually; a scheduler may also call GET as long as it
sends the configured scheduler header (SCHEDULER_EVENT_HEADER).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from askfreely.api.v1.dependencies import get_email_queue_processor
from askfreely.application.use_cases.email_queue import EmailQueueProcessor
from askfreely.core.config import get_settings
from askfreely.core.limiter import limit_process_queue
from askfreely.domain.exceptions import MethodNotAllowedException
from askfreely.schemas.common import ErrorResponse
from askfreely.schemas.email_queue import ProcessQueueResponse

router = APIRouter()

_ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (405, 429, 500)}


def require_scheduler_header(request: Request) -> None:
    """Reject GET calls that do not come from the scheduler (405)."""
    if not request.headers.get(get_settings().scheduler_event_header):
        raise MethodNotAllowedException(request.method)


async def _process(processor: EmailQueueProcessor) -> ProcessQueueResponse:
    report = await processor.process_batch()
    return ProcessQueueResponse.from_report(report)


@router.options("/process", status_code=204, include_in_schema=False)
def process_preflight() -> Response:
    """CORS preflight; headers come from CORSHeadersMiddleware."""
    return Response(status_code=204)


@router.post(
    "/process",
    response_model=ProcessQueueResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
@limit_process_queue
async def process_email_queue(
    request: Request,
    processor: Annotated[EmailQueueProcessor, Depends(get_email_queue_processor)],
) -> ProcessQueueResponse:
    """Send up to one batch of pending emails."""
    return await _process(processor)


@router.get(
    "/process",
    response_model=ProcessQueueResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    dependencies=[Depends(require_scheduler_header)],
)
async def process_email_queue_scheduled(
    processor: Annotated[EmailQueueProcessor, Depends(get_email_queue_processor)],
) -> ProcessQueueResponse:
    """Scheduled invocation; rejected with 405 unless the scheduler header is present."""
    return await _process(processor)
