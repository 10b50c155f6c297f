"""
Jeb's API — Employment Application Schemas
===========================================

What:  The outbound email model used to relay an application.
Why:   The submission itself has no fixed schema: any JSON object is accepted
       as an ordered dict of field name → scalar, so only the email we build
       from it is modelled here.
"""

from typing import List

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """
    What:  One plain-text transactional email.
    Who:   Built by ApplicationService, sent by an EmailSender implementation.
    """

    sender: str = Field(description="RFC 5322 sender, e.g. \"Jeb's Website <noreply@resend.dev>\"")
    to: List[str] = Field(min_length=1)
    subject: str
    text: str

    def to_resend_payload(self) -> dict:
        """Body for Resend's POST /emails."""
        return {
            "from": self.sender,
            "to": list(self.to),
            "subject": self.subject,
            "text": self.text,
        }
