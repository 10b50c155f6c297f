"""
Jeb's API — Checkout Service Unit Tests
========================================

What:  CheckoutService precondition order, line item validation and error
       containment, without HTTP.
How:   The gateway is an AsyncMock; bodies are passed as raw bytes exactly as
       the route would.
"""

import json

import pytest

from jebs_api.exceptions import (
    CheckoutError,
    ConfigurationError,
    PaymentProviderError,
    ValidationError,
)
from jebs_api.schemas.checkout import CheckoutRequest
from jebs_api.services.checkout_service import (
    CheckoutService,
    decode_json_body,
    format_error_location,
)


def encode(body) -> bytes:
    return json.dumps(body).encode()


class TestHelpers:

    def test_format_error_location(self):
        assert format_error_location(("lineItems", 0, "priceCents")) == "lineItems[0].priceCents"
        assert format_error_location(("successUrl",)) == "successUrl"

    def test_decode_empty_body_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            decode_json_body(b"  ")

    def test_decode_invalid_json_rejected(self):
        with pytest.raises(ValueError):
            decode_json_body(b"{lineItems:")


class TestPreconditionOrder:
    """First failing precondition wins; the gateway is only reached when all pass."""

    @pytest.mark.asyncio
    async def test_missing_key_short_circuits_any_body(self, unconfigured_settings, mock_gateway):
        service = CheckoutService(unconfigured_settings, mock_gateway)

        for body in (b"", b"garbage", encode({"lineItems": []})):
            with pytest.raises(ConfigurationError) as exc_info:
                await service.create_session(body)
            assert exc_info.value.message == "Stripe not configured"

        mock_gateway.create_checkout_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_unparseable_body_is_checkout_error(self, settings, mock_gateway):
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(CheckoutError) as exc_info:
            await service.create_session(b"{not json")

        assert exc_info.value.message
        assert exc_info.value.context["error_type"] == "JSONDecodeError"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"successUrl": "https://a", "cancelUrl": "https://b"},
            {"lineItems": [], "successUrl": "https://a", "cancelUrl": "https://b"},
            {"lineItems": {"name": "x"}, "successUrl": "https://a", "cancelUrl": "https://b"},
            [{"name": "x", "priceCents": 100, "quantity": 1}],
        ],
    )
    async def test_line_items_required(self, settings, mock_gateway, body):
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_session(encode(body))

        assert exc_info.value.message == "lineItems required"
        mock_gateway.create_checkout_session.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["successUrl", "cancelUrl"])
    async def test_redirect_urls_required(self, settings, mock_gateway, sample_cart, missing):
        sample_cart[missing] = ""
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_session(encode(sample_cart))

        assert exc_info.value.message == "successUrl and cancelUrl required"
        assert exc_info.value.field == missing

    @pytest.mark.asyncio
    async def test_line_items_checked_before_urls(self, settings, mock_gateway):
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_session(encode({"lineItems": []}))

        assert exc_info.value.message == "lineItems required"


class TestLineItemValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value, location",
        [
            ("priceCents", -1, "lineItems[0].priceCents"),
            ("priceCents", 18.99, "lineItems[0].priceCents"),
            ("priceCents", "1899", "lineItems[0].priceCents"),
            ("quantity", 0, "lineItems[0].quantity"),
            ("quantity", True, "lineItems[0].quantity"),
            ("name", "", "lineItems[0].name"),
        ],
    )
    async def test_bad_field_rejected(self, settings, mock_gateway, sample_cart, field, value, location):
        sample_cart["lineItems"][0][field] = value
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_session(encode(sample_cart))

        assert exc_info.value.message.startswith(f"{location}: ")
        assert exc_info.value.field == location
        mock_gateway.create_checkout_session.assert_not_called()

    def test_id_is_optional_and_may_be_numeric(self, sample_cart):
        sample_cart["lineItems"][0]["id"] = 42
        del sample_cart["lineItems"][1]["id"]

        checkout = CheckoutService.validate(sample_cart)

        assert checkout.line_items[0].id == 42
        assert checkout.line_items[1].id is None

    def test_zero_price_allowed(self, sample_cart):
        sample_cart["lineItems"][0]["priceCents"] = 0
        checkout = CheckoutService.validate(sample_cart)
        assert checkout.line_items[0].price_cents == 0


class TestCreateSession:

    @pytest.mark.asyncio
    async def test_gateway_called_once_with_validated_cart(self, settings, mock_gateway, sample_cart):
        service = CheckoutService(settings, mock_gateway)

        url = await service.create_session(encode(sample_cart))

        assert url == mock_gateway.create_checkout_session.return_value
        mock_gateway.create_checkout_session.assert_awaited_once()
        checkout = mock_gateway.create_checkout_session.await_args.args[0]
        assert isinstance(checkout, CheckoutRequest)
        assert [item.name for item in checkout.line_items] == ["Large Margherita", "Garlic Knots"]
        assert checkout.success_url == sample_cart["successUrl"]
        assert checkout.cancel_url == sample_cart["cancelUrl"]

    @pytest.mark.asyncio
    async def test_provider_error_propagates_unchanged(self, settings, mock_gateway, sample_cart):
        error = PaymentProviderError(message="Your card was declined.")
        mock_gateway.create_checkout_session.side_effect = error
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(PaymentProviderError) as exc_info:
            await service.create_session(encode(sample_cart))

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_its_message(self, settings, mock_gateway, sample_cart):
        mock_gateway.create_checkout_session.side_effect = RuntimeError("socket closed")
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(CheckoutError) as exc_info:
            await service.create_session(encode(sample_cart))

        assert exc_info.value.message == "socket closed"

    @pytest.mark.asyncio
    async def test_unexpected_error_without_message(self, settings, mock_gateway, sample_cart):
        mock_gateway.create_checkout_session.side_effect = RuntimeError()
        service = CheckoutService(settings, mock_gateway)

        with pytest.raises(CheckoutError) as exc_info:
            await service.create_session(encode(sample_cart))

        assert exc_info.value.message == "Checkout failed"
