"""
Jeb's API — Abstract Email Sender Interface
============================================

What:  Contract for the transactional-email collaborator.
How:   ResendEmailSender is the production implementation; tests use
       httpx.MockTransport or an AsyncMock in its place.
Who:   Called by ApplicationService when RESEND_API_KEY is configured.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jebs_api.schemas.application import EmailMessage


class EmailSender(ABC):
    """
    Contract:
        - send() issues exactly one provider request
        - Any non-success outcome raises EmailDeliveryError whose message is
          the provider's own error text
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> Optional[str]:
        """
        Deliver one plain-text email.

        Returns:
            The provider's message ID when it reports one, else None.

        Raises:
            EmailDeliveryError: Provider answered non-2xx or was unreachable.
        """
        ...
