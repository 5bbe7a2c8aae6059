"""Audience question and author validation.

Validators sanitize first, then check. Failures raise QuestionValidationError
carrying a stable reason code and the message returned to the caller.
"""

import re
from typing import Any

from askfreely.domain.exceptions import QuestionValidationError
from askfreely.shared.utils.sanitization import (
    sanitize_text,
    utf16_code_units,
    utf16_length,
)

QUESTION_MIN_LENGTH = 5
QUESTION_MAX_LENGTH = 1000
AUTHOR_MAX_LENGTH = 100
ANONYMOUS_AUTHOR = "Anonymous"

INVALID_INPUT = "INVALID_INPUT"
TOO_SHORT = "TOO_SHORT"
TOO_LONG = "TOO_LONG"
SPAM_PATTERN = "SPAM_PATTERN"

# Same UTF-16 code unit 11 or more times in a row. Matched over code units,
# so a repeated emoji (alternating surrogates) is not flagged.
_REPEATED_CHAR = re.compile(r"(.)\1{10,}")


def validate_question(text: Any) -> str:
    """Return the sanitized question text.

    Raises:
        QuestionValidationError: Missing, too short, too long or spam-like text.
    """
    if not text or not isinstance(text, str):
        raise QuestionValidationError(INVALID_INPUT, "Question is required")
    sanitized = sanitize_text(text, QUESTION_MAX_LENGTH)
    length = utf16_length(sanitized)
    if length < QUESTION_MIN_LENGTH:
        raise QuestionValidationError(
            TOO_SHORT, f"Question must be at least {QUESTION_MIN_LENGTH} characters"
        )
    # Unreachable while sanitize_text truncates to the same limit.
    if length > QUESTION_MAX_LENGTH:
        raise QuestionValidationError(
            TOO_LONG, f"Question cannot exceed {QUESTION_MAX_LENGTH} characters"
        )
    if _REPEATED_CHAR.search(utf16_code_units(sanitized)):
        raise QuestionValidationError(SPAM_PATTERN, "Question appears to be spam")
    return sanitized


def validate_author(author: Any) -> str:
    """Return the sanitized author name, or "Anonymous". Never fails."""
    if not author or not isinstance(author, str):
        return ANONYMOUS_AUTHOR
    return sanitize_text(author, AUTHOR_MAX_LENGTH) or ANONYMOUS_AUTHOR
