# Services package init
"""
Jeb's API — Services Layer
===========================

What:  Business logic between routes (HTTP) and the external providers.
How:   Services receive Settings and their provider adapter through the
       constructor; jebs_api.dependencies wires them per request.

Service Inventory:
    - CheckoutService:       cart validation → one checkout-session call
    - ApplicationService:    submission → transcript → one email (or a log line)
    - PaymentsGateway (abstract) / StripeCheckoutGateway
    - EmailSender (abstract)     / ResendEmailSender
"""
