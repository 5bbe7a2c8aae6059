"""Question intake API: public, unauthenticated, rate limited.

The raw body is handed to QuestionIntakeService so rate limits are checked
before it is parsed.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from askfreely.api.v1.dependencies import (
    get_client_identity,
    get_question_intake_service,
)
from askfreely.application.dtos.question import ClientIdentity
from askfreely.application.use_cases.questions import QuestionIntakeService
from askfreely.schemas.common import ErrorResponse
from askfreely.schemas.question import QuestionSubmitRequest, QuestionSubmitResponse

router = APIRouter()

_ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 403, 404, 405, 429, 500)
}


@router.options("", status_code=204, include_in_schema=False)
def questions_preflight() -> Response:
    """CORS preflight; headers come from CORSHeadersMiddleware."""
    return Response(status_code=204)


@router.post(
    "",
    response_model=QuestionSubmitResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": QuestionSubmitRequest.model_json_schema(by_alias=True)
                }
            },
        }
    },
)
async def submit_question(
    request: Request,
    client: Annotated[ClientIdentity, Depends(get_client_identity)],
    service: Annotated[QuestionIntakeService, Depends(get_question_intake_service)],
) -> QuestionSubmitResponse:
    """Submit an audience question to an event."""
    body = await request.body()
    result = await service.submit(body, client)
    return QuestionSubmitResponse(message=result.message, question_id=result.question_id)
