"""
Jeb's API — Employment Application Service
===========================================

What:  Turns an application form submission into a plain-text transcript and
       relays it by email, or logs it when email is not configured.
How:   Generic ordered-mapping serialization (no known-field special cases),
       then at most one EmailSender call.
Who:   Called by POST /api/submit-application.

Transcript rules:
    - entries keep the submission's insertion order
    - null and "" values are dropped; false and 0 are kept
    - each remaining entry renders as "key: value", joined by newlines
    - booleans render as true/false, arrays/objects as compact JSON

Degraded mode:
    Without RESEND_API_KEY the transcript is written to the log at INFO and
    the submission still succeeds. Applications are never rejected for
    missing email configuration.
"""

import json
import logging
from typing import Any, Mapping

from jebs_api.config import Settings
from jebs_api.exceptions import ApplicationSubmissionError, JebsApiError
from jebs_api.schemas.application import EmailMessage
from jebs_api.services.checkout_service import decode_json_body
from jebs_api.services.email_base import EmailSender

logger = logging.getLogger(__name__)

TRANSCRIPT_BANNER = "New employment application submitted:"
SUBJECT_PREFIX = "Employment Application - "


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def format_value(value: Any) -> str:
    """Render one submitted value the way the website's JavaScript would show it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def render_transcript(submission: Mapping[str, Any]) -> str:
    return "\n".join(
        f"{key}: {format_value(value)}"
        for key, value in submission.items()
        if not is_blank(value)
    )


def build_subject(submission: Mapping[str, Any]) -> str:
    """'Employment Application - Jane Doe'; a missing name part becomes ''."""

    def part(key: str) -> str:
        value = submission.get(key)
        return format_value(value) if value else ""

    return f"{SUBJECT_PREFIX}{part('firstName')} {part('lastName')}"


class ApplicationService:
    """
    Collaborators, injected per request:
        settings:     immutable application Settings
        email_sender: EmailSender (Resend in production), used only when
                      RESEND_API_KEY is configured
    """

    def __init__(self, settings: Settings, email_sender: EmailSender):
        self.settings = settings
        self.email_sender = email_sender

    def build_email(self, submission: Mapping[str, Any], transcript: str) -> EmailMessage:
        return EmailMessage(
            sender=self.settings.email_from,
            to=[self.settings.jeb_application_email],
            subject=build_subject(submission),
            text=f"{TRANSCRIPT_BANNER}\n\n{transcript}",
        )

    async def submit(self, raw_body: bytes) -> None:
        """
        Relay (or log) one application.

        Raises:
            EmailDeliveryError: Resend rejected the email
            ApplicationSubmissionError: unparseable body, non-object body,
                or any other unexpected failure
        """
        try:
            submission = decode_json_body(raw_body)
            if not isinstance(submission, dict):
                raise ApplicationSubmissionError(
                    message="Application must be a JSON object",
                    context={"body_type": type(submission).__name__},
                )

            transcript = render_transcript(submission)

            if self.settings.email_configured:
                email = self.build_email(submission, transcript)
                await self.email_sender.send(email)
                logger.info(
                    "Application relayed to %s (%d field(s))",
                    self.settings.jeb_application_email,
                    sum(1 for value in submission.values() if not is_blank(value)),
                )
            else:
                logger.info("Application received (no RESEND_API_KEY):\n%s", transcript)
        except JebsApiError:
            raise
        except Exception as e:
            logger.error("Application submit error: %s", e, exc_info=True)
            raise ApplicationSubmissionError(
                message=str(e) or "Submission failed",
                context={"error_type": type(e).__name__},
            ) from e
