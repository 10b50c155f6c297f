"""
Jeb's API — Checkout Service
=============================

What:  Validates a cart and asks the payments gateway for a hosted checkout URL.
How:   Fail-fast precondition chain, then exactly one gateway call.
Who:   Called by POST /api/create-checkout-session.

Precondition order (first failure wins):
    1. STRIPE_SECRET_KEY configured   → else ConfigurationError  (500 "Stripe not configured")
    2. Body parses as JSON            → else CheckoutError        (500, parser message)
    3. lineItems is a non-empty array → else ValidationError      (400 "lineItems required")
    4. successUrl and cancelUrl set   → else ValidationError      (400 "successUrl and cancelUrl required")
    5. Every line item well-formed    → else ValidationError      (400 "lineItems[0].quantity: ...")

Anything unexpected after step 1 is logged with its traceback and surfaced as
CheckoutError with the exception's own message (or "Checkout failed").
"""

import json
import logging
from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from jebs_api.config import Settings
from jebs_api.exceptions import (
    CheckoutError,
    ConfigurationError,
    JebsApiError,
    ValidationError,
)
from jebs_api.schemas.checkout import CheckoutRequest
from jebs_api.services.payments_base import PaymentsGateway

logger = logging.getLogger(__name__)


def decode_json_body(raw: bytes) -> Any:
    """
    Parse a raw request body as JSON.

    Raises:
        ValueError: empty body, invalid UTF-8, or invalid JSON
    """
    if not raw or not raw.strip():
        raise ValueError("Request body is empty")
    return json.loads(raw)


def format_error_location(loc: Sequence[Union[str, int]]) -> str:
    """('lineItems', 0, 'priceCents') → 'lineItems[0].priceCents'"""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


class CheckoutService:
    """
    Stateless apart from its two collaborators, both injected per request:
        settings: immutable application Settings
        gateway:  PaymentsGateway (Stripe in production)
    """

    def __init__(self, settings: Settings, gateway: PaymentsGateway):
        self.settings = settings
        self.gateway = gateway

    @staticmethod
    def validate(body: Any) -> CheckoutRequest:
        """
        Apply checks 3 to 5 to a decoded body.

        A body that is not a JSON object has no lineItems, so it fails check 3.
        """
        payload = body if isinstance(body, dict) else {}

        line_items = payload.get("lineItems")
        if not isinstance(line_items, list) or not line_items:
            raise ValidationError(message="lineItems required", field="lineItems")

        if not payload.get("successUrl") or not payload.get("cancelUrl"):
            raise ValidationError(
                message="successUrl and cancelUrl required",
                field="successUrl" if not payload.get("successUrl") else "cancelUrl",
            )

        try:
            return CheckoutRequest.model_validate(payload)
        except PydanticValidationError as e:
            first = e.errors(include_url=False)[0]
            location = format_error_location(first["loc"])
            raise ValidationError(
                message=f"{location}: {first['msg']}",
                field=location,
                context={"error_count": e.error_count()},
            ) from e

    async def create_session(self, raw_body: bytes) -> Optional[str]:
        """
        Run the precondition chain and create the checkout session.

        Returns:
            The hosted checkout URL.

        Raises:
            ConfigurationError, ValidationError, PaymentProviderError, CheckoutError
        """
        if not self.settings.stripe_configured:
            raise ConfigurationError(
                message="Stripe not configured", setting="STRIPE_SECRET_KEY"
            )

        try:
            body = decode_json_body(raw_body)
            checkout = self.validate(body)
            url = await self.gateway.create_checkout_session(checkout)
        except JebsApiError:
            raise
        except Exception as e:
            logger.error("Stripe error: %s", e, exc_info=True)
            raise CheckoutError(
                message=str(e) or "Checkout failed",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "Checkout session ready: %d line item(s), %d unit(s)",
            len(checkout.line_items),
            sum(item.quantity for item in checkout.line_items),
        )
        return url
