"""Resend transactional email client (https://resend.com/docs/api-reference/emails)."""

from __future__ import annotations

import json
from dataclasses import dataclass

import httpx

from askfreely.core.config import Settings, get_settings
from askfreely.domain.exceptions import MailDeliveryError
from askfreely.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.resend.com/emails"


@dataclass(frozen=True)
class OutboundEmail:
    """One rendered email ready for the provider."""

    to: str
    subject: str
    html: str


class ResendMailSender:
    """Sends one email per call via the Resend HTTP API (an IMailSender)."""

    def __init__(
        self,
        api_key: str | None,
        from_email: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize sender.

        Args:
            api_key: Resend API key. None is allowed so the processor can
                record a per-email failure instead of failing at startup.
            from_email: Sender, e.g. 'Ask Freely <onboarding@resend.dev>'.
            http_client: Optional shared httpx.AsyncClient for connection reuse.
            api_url: Emails endpoint.
            timeout: Per-request timeout in seconds.
        """
        self._api_key = api_key
        self._from_email = from_email
        self._http_client = http_client
        self._api_url = api_url
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "ResendMailSender":
        s = settings or get_settings()
        key = s.resend_api_key.get_secret_value() if s.resend_api_key else None
        return cls(
            key,
            s.resend_from_email,
            http_client=http_client,
            api_url=s.resend_api_url,
            timeout=s.outbound_timeout_seconds,
        )

    def _payload(self, message: OutboundEmail) -> dict:
        return {
            "from": self._from_email,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }

    async def _post(self, client: httpx.AsyncClient, message: OutboundEmail) -> httpx.Response:
        return await client.post(
            self._api_url,
            json=self._payload(message),
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
        )

    async def send(self, to: str, subject: str, html: str) -> str | None:
        """Send one email and return the Resend message id.

        Raises:
            MailDeliveryError: Missing API key, non-2xx response or transport error.
        """
        if not self._api_key:
            raise MailDeliveryError("RESEND_API_KEY not configured")
        message = OutboundEmail(to=to, subject=subject, html=html)
        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, message)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, message)
        except httpx.HTTPError as e:
            raise MailDeliveryError(f"Resend request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.is_success:
            detail = json.dumps(body, separators=(",", ":"))
            raise MailDeliveryError(
                f"Resend API error: {response.status_code} - {detail}",
                status_code=response.status_code,
            )
        logger.debug("Resend accepted email to %s", to)
        return body.get("id") if isinstance(body, dict) else None


_http_client: httpx.AsyncClient | None = None


def get_mail_http_client() -> httpx.AsyncClient:
    """Shared httpx client for the mail provider (created lazily)."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(timeout=get_settings().outbound_timeout_seconds)
    return _http_client


async def close_mail_http_client() -> None:
    """Close the shared client. Call from app shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
