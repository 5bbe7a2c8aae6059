"""Outbound email: the Resend client (implements IMailSender)."""

from askfreely.infrastructure.external.email.resend import (
    OutboundEmail,
    ResendMailSender,
    close_mail_http_client,
    get_mail_http_client,
)

__all__ = [
    "OutboundEmail",
    "ResendMailSender",
    "close_mail_http_client",
    "get_mail_http_client",
]
