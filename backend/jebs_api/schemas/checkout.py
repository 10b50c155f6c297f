"""
Jeb's API — Checkout Request/Response Schemas
==============================================

What:  Pydantic models for the POST /api/create-checkout-session contract.
How:   The route hands the raw JSON body to CheckoutService, which checks the
       two required-field rules first (so their fixed messages win) and then
       validates the remaining shape with these models.
Who:   CheckoutService, the Stripe adapter, and the route's response model.

Wire format (camelCase, as sent by the website cart):
    {
        "lineItems": [{"id": "margherita", "name": "Margherita", "priceCents": 1450, "quantity": 2}],
        "successUrl": "https://example.com/thanks",
        "cancelUrl": "https://example.com/cart"
    }
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

# Stripe amounts are integer minor units; the cart already sends cents.
CHECKOUT_CURRENCY = "usd"


class LineItem(BaseModel):
    """
    What:  One cart entry.
    Rules: priceCents is an integer number of cents (no float conversion),
           quantity is a positive integer. `id` is the cart's own product key
           and is not forwarded to Stripe.
    """

    id: Optional[Union[str, int]] = Field(default=None, description="Cart product identifier")
    name: str = Field(min_length=1, description="Product display name shown on the Stripe page")
    price_cents: int = Field(alias="priceCents", ge=0, strict=True, description="Unit price in cents")
    quantity: int = Field(gt=0, strict=True, description="Number of units")

    model_config = {"populate_by_name": True}

    def to_stripe(self) -> dict:
        """Shape expected by Checkout Session `line_items`."""
        return {
            "price_data": {
                "currency": CHECKOUT_CURRENCY,
                "product_data": {"name": self.name},
                "unit_amount": self.price_cents,
            },
            "quantity": self.quantity,
        }


class CheckoutRequest(BaseModel):
    """What: Validated checkout body (non-empty items, both redirect URLs)."""

    line_items: List[LineItem] = Field(alias="lineItems", min_length=1)
    success_url: str = Field(alias="successUrl", min_length=1)
    cancel_url: str = Field(alias="cancelUrl", min_length=1)

    model_config = {"populate_by_name": True}


class CheckoutSessionResponse(BaseModel):
    """
    What:  Body returned on success.
    Who:   The website redirects the browser to `url`.
    """

    url: Optional[str] = Field(description="Hosted checkout page URL")
