"""Email queue use cases (producer and processor)."""

from askfreely.application.use_cases.email_queue.enqueue import EmailQueueService
from askfreely.application.use_cases.email_queue.process_queue import EmailQueueProcessor

__all__ = ["EmailQueueProcessor", "EmailQueueService"]
