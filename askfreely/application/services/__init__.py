"""Application services (validation)."""

from askfreely.application.services.question_validator import (
    validate_author,
    validate_question,
)

__all__ = ["validate_author", "validate_question"]
