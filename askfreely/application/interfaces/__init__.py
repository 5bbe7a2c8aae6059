"""Application ports (repository and service protocols)."""

from askfreely.application.interfaces.repositories import (
    IEmailQueueRepository,
    IEventRepository,
    IQuestionRepository,
)
from askfreely.application.interfaces.services import (
    IEmailTemplateRenderer,
    IMailSender,
)

__all__ = [
    "IEmailQueueRepository",
    "IEmailTemplateRenderer",
    "IEventRepository",
    "IMailSender",
    "IQuestionRepository",
]
