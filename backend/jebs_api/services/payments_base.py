"""
Jeb's API — Abstract Payments Gateway Interface
================================================

What:  Contract for the hosted-checkout collaborator.
How:   Concrete gateways inherit from PaymentsGateway and implement
       create_checkout_session(). StripeCheckoutGateway is the production one;
       tests substitute an AsyncMock through FastAPI dependency overrides.
Who:   Called by CheckoutService, once per valid checkout request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jebs_api.schemas.checkout import CheckoutRequest


class PaymentsGateway(ABC):
    """
    Contract:
        - create_checkout_session() makes exactly one provider call
        - Provider failures are raised as PaymentProviderError
        - No retries: a session create is not idempotent without
          idempotency keys, which this service does not manage
    """

    @abstractmethod
    async def create_checkout_session(self, checkout: CheckoutRequest) -> Optional[str]:
        """
        Create a single-use, payment-mode hosted checkout session.

        Args:
            checkout: Validated cart with redirect URLs.

        Returns:
            The hosted checkout page URL the browser should be sent to.

        Raises:
            PaymentProviderError: The provider rejected or failed the request.
        """
        ...
