"""
Jeb's API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each failure family.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` with the family's HTTP status code.
Who:   Raised by services and provider adapters; caught by global handlers.
When:  During request processing, and by the offline logo tool.

Exception Hierarchy:
    JebsApiError (base)
    ├── ConfigurationError          → 500 (required credential missing)
    ├── ValidationError             → 400 (client can fix the request)
    ├── ProviderError               → 500 (a collaborator call failed)
    │   ├── PaymentProviderError    → Stripe
    │   └── EmailDeliveryError      → Resend
    ├── CheckoutError               → 500 (any other checkout failure)
    ├── ApplicationSubmissionError  → 500 (any other application failure)
    └── ToolchainError              → CLI only (magick / potrace failures)

Unlike the HTTP client errors of most APIs, `message` here IS the response
body: the website front end shows it to the visitor as-is.
"""

from typing import Any, Dict, Optional


class JebsApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(JebsApiError):
    """
    Raised when a credential the operation depends on is not configured.

    When:    STRIPE_SECRET_KEY missing on a checkout request.
    HTTP:    500 Internal Server Error (not retryable until redeployed)
    """

    def __init__(
        self,
        message: str = "Service not configured",
        setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if setting:
            ctx["setting"] = setting
        super().__init__(message=message, context=ctx)
        self.setting = setting


class ValidationError(JebsApiError):
    """
    Raised when client input fails validation.

    When:    Empty lineItems, missing redirect URLs, malformed line item fields.
    HTTP:    400 Bad Request

    Example response:
        {"error": "successUrl and cancelUrl required"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ProviderError(JebsApiError):
    """
    Raised when an external collaborator rejects or fails a request.

    Attributes:
        provider:             "stripe" or "resend"
        provider_status_code: HTTP status returned by the provider, when known
    """

    provider: str = "provider"

    def __init__(
        self,
        message: str = "Upstream provider request failed",
        provider_status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["provider"] = self.provider
        if provider_status_code is not None:
            ctx["provider_status_code"] = provider_status_code
        super().__init__(message=message, context=ctx)
        self.provider_status_code = provider_status_code


class PaymentProviderError(ProviderError):
    """Stripe refused or failed to create the checkout session."""

    provider = "stripe"

    def __init__(
        self,
        message: str = "Checkout failed",
        provider_status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            provider_status_code=provider_status_code,
            context=context,
        )


class EmailDeliveryError(ProviderError):
    """
    Resend answered with a non-success status, or could not be reached.

    The message is Resend's own response body so the caller sees the
    provider's explanation (invalid sender domain, bad API key, ...).
    """

    provider = "resend"

    def __init__(
        self,
        message: str = "Email send failed",
        provider_status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            provider_status_code=provider_status_code,
            context=context,
        )


class CheckoutError(JebsApiError):
    """Any other failure while creating a checkout session (e.g. unparseable body)."""

    def __init__(
        self,
        message: str = "Checkout failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ApplicationSubmissionError(JebsApiError):
    """Any other failure while relaying an employment application."""

    def __init__(
        self,
        message: str = "Submission failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ToolchainError(JebsApiError):
    """
    Raised by the logo tool when an external binary is missing or fails.

    Attributes:
        command:    The argv that failed (or the binary that was not found)
        returncode: Process exit status, None when the binary is missing
    """

    def __init__(
        self,
        message: str = "External tool failed",
        command: Optional[list] = None,
        returncode: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message=message, context=ctx)
        self.command = command
        self.returncode = returncode
