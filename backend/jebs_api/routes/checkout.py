"""
Jeb's API — Checkout Route Handler
===================================

What:  POST /api/create-checkout-session
How:   Reads the raw body and hands it to CheckoutService. The body is not
       declared as a FastAPI model: the service owns the precondition order
       (credential check before parsing, fixed 400 messages before shape
       errors), which FastAPI's automatic 422 would pre-empt.
Who:   The website cart's "Checkout" button.

Request Flow:
    1. Client POSTs the cart JSON
    2. CheckoutService validates and calls Stripe once
    3. Return 200 {"url": "<hosted checkout URL>"}
    4. On error: global exception handlers return {"error": "..."}
"""

from fastapi import APIRouter, Depends, Request

from jebs_api.dependencies import get_checkout_service
from jebs_api.schemas.checkout import CheckoutSessionResponse
from jebs_api.schemas.common import ErrorResponse
from jebs_api.services.checkout_service import CheckoutService

router = APIRouter(prefix="/api", tags=["Checkout"])


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={
        200: {"description": "Checkout session created", "model": CheckoutSessionResponse},
        400: {"description": "Missing or malformed cart fields", "model": ErrorResponse},
        500: {"description": "Stripe not configured or Stripe failure", "model": ErrorResponse},
    },
    summary="Create a Stripe checkout session",
    description=(
        "Body: {lineItems: [{id, name, priceCents, quantity}], successUrl, cancelUrl}. "
        "Prices are integer cents in USD. Returns the hosted checkout URL."
    ),
)
async def create_checkout_session(
    request: Request,
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutSessionResponse:
    raw_body = await request.body()
    url = await service.create_session(raw_body)
    return CheckoutSessionResponse(url=url)
