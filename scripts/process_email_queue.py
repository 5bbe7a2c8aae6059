"""Process one batch of the email queue outside HTTP (cron, manual runs).

Usage:
    python -m scripts.process_email_queue [batch_size]
If batch_size is omitted, EMAIL_QUEUE_BATCH_SIZE from config is used.
Requires the store (DATABASE_BACKEND) and RESEND_API_KEY to be configured.
"""

import asyncio
import json
import sys

from askfreely.application.use_cases.email_queue import EmailQueueProcessor
from askfreely.core.config import get_settings
from askfreely.infrastructure.external.email import (
    ResendMailSender,
    close_mail_http_client,
    get_mail_http_client,
)
from askfreely.infrastructure.firebase import close_database, get_database
from askfreely.infrastructure.firebase.repositories import RealtimeEmailQueueRepository
from askfreely.infrastructure.services import EmailTemplateRenderer
from askfreely.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Run one batch and print the report as JSON."""
    settings = get_settings()
    setup_logging()
    batch_size = settings.email_queue_batch_size
    if len(sys.argv) > 1:
        try:
            batch_size = int(sys.argv[1])
        except ValueError:
            print(f"Invalid batch size: {sys.argv[1]}", file=sys.stderr)
            sys.exit(1)
        if batch_size < 1:
            print("Batch size must be >= 1", file=sys.stderr)
            sys.exit(1)

    processor = EmailQueueProcessor(
        queue_repo=RealtimeEmailQueueRepository(get_database()),
        renderer=EmailTemplateRenderer(site_url=settings.public_site_url),
        mail_sender=ResendMailSender.from_settings(
            settings, http_client=get_mail_http_client()
        ),
        batch_size=batch_size,
    )
    try:
        report = await processor.process_batch()
    finally:
        await close_mail_http_client()
        await close_database()

    print(json.dumps({
        "message": report.message,
        "processed": report.processed,
        "failed": report.failed,
        "results": [outcome.to_dict() for outcome in report.results],
    }, indent=2))
    if report.failed:
        sys.exit(2)


if __name__ == "__main__":
    asyncio.run(main())
