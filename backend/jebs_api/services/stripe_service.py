"""
Jeb's API — Stripe Checkout Gateway
====================================

What:  PaymentsGateway implementation backed by Stripe Checkout Sessions.
How:   Uses the official `stripe` SDK through a per-gateway StripeClient
       (explicit API key and pinned API version, no module-global
       `stripe.api_key`). The SDK is synchronous, so the call runs in
       Starlette's threadpool to keep the event loop free.
Who:   Built per request by jebs_api.dependencies; called by CheckoutService.

Stripe request:
    POST /v1/checkout/sessions
        mode=payment
        line_items[n][price_data][currency]=usd
        line_items[n][price_data][product_data][name]=<item name>
        line_items[n][price_data][unit_amount]=<priceCents>
        line_items[n][quantity]=<quantity>
        success_url=..., cancel_url=...
"""

import logging
from typing import Optional

import stripe
from starlette.concurrency import run_in_threadpool

from jebs_api.exceptions import PaymentProviderError
from jebs_api.schemas.checkout import CheckoutRequest
from jebs_api.services.payments_base import PaymentsGateway

logger = logging.getLogger(__name__)


class StripeCheckoutGateway(PaymentsGateway):
    """
    Stripe-hosted checkout.

    Error translation:
        stripe.StripeError → PaymentProviderError carrying Stripe's
        user-facing message, HTTP status, error code and request ID.
    """

    def __init__(self, api_key: str, api_version: str = "2024-06-20"):
        self._api_key = api_key
        self._api_version = api_version
        self._client: Optional[stripe.StripeClient] = None

    @property
    def client(self) -> stripe.StripeClient:
        """Created on first use so an unconfigured gateway never touches the SDK."""
        if self._client is None:
            self._client = stripe.StripeClient(
                self._api_key,
                stripe_version=self._api_version,
                max_network_retries=0,
            )
        return self._client

    @staticmethod
    def build_session_params(checkout: CheckoutRequest) -> dict:
        return {
            "mode": "payment",
            "line_items": [item.to_stripe() for item in checkout.line_items],
            "success_url": checkout.success_url,
            "cancel_url": checkout.cancel_url,
        }

    async def create_checkout_session(self, checkout: CheckoutRequest) -> Optional[str]:
        params = self.build_session_params(checkout)

        try:
            session = await run_in_threadpool(
                self.client.checkout.sessions.create, params=params
            )
        except stripe.StripeError as e:
            logger.warning(
                "Stripe rejected checkout session: status=%s code=%s request=%s",
                e.http_status,
                e.code,
                e.request_id,
            )
            raise PaymentProviderError(
                message=e.user_message or str(e) or "Checkout failed",
                provider_status_code=e.http_status,
                context={"stripe_code": e.code, "stripe_request_id": e.request_id},
            ) from e

        logger.info("Stripe checkout session %s created", session.id)
        return session.url
