"""
Jeb's API — Resend Email Sender
================================

What:  EmailSender implementation for Resend's HTTP API.
How:   One `POST /emails` per message over an httpx.AsyncClient with bearer
       auth and a bounded timeout. A non-2xx answer raises
       EmailDeliveryError with Resend's response body as the message.
Who:   Built per request by jebs_api.dependencies; called by ApplicationService.

Resend request:
    POST https://api.resend.com/emails
    Authorization: Bearer <RESEND_API_KEY>
    {"from": "...", "to": ["..."], "subject": "...", "text": "..."}

Resend success response:
    200 {"id": "49a3999c-0ce1-4ea6-ab68-afcd6dc2e794"}
"""

import logging
from typing import Optional

import httpx

from jebs_api.exceptions import EmailDeliveryError
from jebs_api.schemas.application import EmailMessage
from jebs_api.services.email_base import EmailSender

logger = logging.getLogger(__name__)


class ResendEmailSender(EmailSender):
    """
    Constructor accepts explicit params, no env-var loading.

    Args:
        api_key:   Resend API key (sent as a Bearer token)
        base_url:  API root, overridable for staging or tests
        timeout:   Seconds allowed for the whole request
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def send(self, message: EmailMessage) -> Optional[str]:
        async with self._client() as client:
            try:
                response = await client.post("/emails", json=message.to_resend_payload())
            except httpx.TimeoutException as e:
                raise EmailDeliveryError(
                    message=f"Email send timed out after {self._timeout:g}s",
                    context={"error_type": type(e).__name__},
                ) from e
            except httpx.HTTPError as e:
                raise EmailDeliveryError(
                    message=str(e) or "Email send failed",
                    context={"error_type": type(e).__name__},
                ) from e

        if not response.is_success:
            logger.warning("Resend answered %d", response.status_code)
            raise EmailDeliveryError(
                message=response.text or "Email send failed",
                provider_status_code=response.status_code,
            )

        try:
            email_id = response.json().get("id")
        except (ValueError, AttributeError):
            email_id = None
        logger.info("Resend accepted email %s", email_id or "(no id)")
        return email_id
