"""
Jeb's API — FastAPI Dependency Wiring
======================================

What:  Builds each request's services from the application's Settings.
How:   FastAPI `Depends` chain: Settings → provider adapter → service.
       Tests replace any link through `app.dependency_overrides`.
"""

from fastapi import Depends

from jebs_api.config import Settings, get_settings
from jebs_api.services.application_service import ApplicationService
from jebs_api.services.checkout_service import CheckoutService
from jebs_api.services.email_base import EmailSender
from jebs_api.services.payments_base import PaymentsGateway
from jebs_api.services.resend_service import ResendEmailSender
from jebs_api.services.stripe_service import StripeCheckoutGateway


def get_payments_gateway(settings: Settings = Depends(get_settings)) -> PaymentsGateway:
    return StripeCheckoutGateway(
        api_key=settings.stripe_secret_key,
        api_version=settings.stripe_api_version,
    )


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    return ResendEmailSender(
        api_key=settings.resend_api_key,
        base_url=settings.resend_api_url,
        timeout=settings.email_timeout_seconds,
    )


def get_checkout_service(
    settings: Settings = Depends(get_settings),
    gateway: PaymentsGateway = Depends(get_payments_gateway),
) -> CheckoutService:
    return CheckoutService(settings=settings, gateway=gateway)


def get_application_service(
    settings: Settings = Depends(get_settings),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ApplicationService:
    return ApplicationService(settings=settings, email_sender=email_sender)
