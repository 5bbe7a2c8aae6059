"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import Any, Protocol


class IMailSender(Protocol):
    """Transactional email provider."""

    async def send(self, to: str, subject: str, html: str) -> str | None:
        """Send one email; return the provider message id.

        Raises MailDeliveryError on missing configuration, non-2xx or transport errors.
        """


class IEmailTemplateRenderer(Protocol):
    """Template id + data bag -> HTML document."""

    def render(self, template_id: str | None, data: dict[str, Any] | None) -> str:
        """Render HTML; unknown template ids fall back to the announcement template."""
