"""Question submission API schemas.

The request body is parsed by the use case (after rate limiting), so
QuestionSubmitRequest only documents it in OpenAPI.
"""

from pydantic import BaseModel, ConfigDict, Field


class QuestionSubmitRequest(BaseModel):
    """Request body for POST /questions."""

    model_config = ConfigDict(populate_by_name=True)

    event_id: str = Field(..., alias="eventId", description="Event to ask the question on")
    question: str = Field(..., description="Question text (5 to 1000 characters after cleanup)")
    author: str | None = Field(default=None, description="Display name; defaults to Anonymous")
    anonymous: bool = Field(default=False, description="Hide the author name")


class QuestionSubmitResponse(BaseModel):
    """Response for an accepted question."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Question submitted successfully"
    question_id: str = Field(..., alias="questionId")
