"""
Jeb's API — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types/ranges, and produces a frozen Settings object.
Who:   Built once by the app factory and stored on `app.state.settings`;
       services receive it through their constructors.
When:  Loaded once per process; never mutated afterwards.

Environment variables (case-insensitive):
    STRIPE_SECRET_KEY       Stripe secret key, required for checkout
    RESEND_API_KEY          Resend API key; without it applications are only logged
    JEB_APPLICATION_EMAIL   Destination address for employment applications
    CORS_ORIGIN             Value of Access-Control-Allow-Origin
"""

from typing import Optional

from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_APPLICATION_EMAIL = "jebs@marziale.tech"
DEFAULT_CORS_ORIGIN = "*"
DEFAULT_EMAIL_FROM = "Jeb's Website <noreply@resend.dev>"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every credential is optional at load time. Missing credentials are
    reported at startup and enforced per request by the service that needs
    them, so the health check keeps answering on a half-configured deploy.
    """

    # ── Service ───────────────────────────────────────────────────────────
    service_name: str = Field(default="jebs-api")

    # ── Stripe ────────────────────────────────────────────────────────────
    # What: Secret key used to create hosted checkout sessions
    stripe_secret_key: str = Field(default="", description="Stripe secret API key")

    # What: API version pinned on every Stripe request
    stripe_api_version: str = Field(default="2024-06-20")

    # ── Resend (transactional email) ──────────────────────────────────────
    resend_api_key: str = Field(default="", description="Resend API key (optional)")
    resend_api_url: str = Field(default="https://api.resend.com")

    # What: Where employment applications are delivered
    jeb_application_email: str = Field(default=DEFAULT_APPLICATION_EMAIL)

    # What: Fixed sender identity on relayed applications
    email_from: str = Field(default=DEFAULT_EMAIL_FROM)

    # What: Upper bound for one Resend request, in seconds
    email_timeout_seconds: float = Field(default=10.0, gt=0, le=120)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: a single origin or "*"
    cors_origin: str = Field(default=DEFAULT_CORS_ORIGIN)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Expose /docs and /openapi.json (off: only the four API routes answer)
    enable_docs: bool = Field(default=False)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("jeb_application_email", "cors_origin", "email_from", "service_name")
    @classmethod
    def blank_means_default(cls, v: str, info) -> str:
        """An empty or whitespace-only variable falls back to the field default."""
        if v and v.strip():
            return v.strip()
        return cls.model_fields[info.field_name].default

    @field_validator("stripe_secret_key", "resend_api_key")
    @classmethod
    def strip_credential(cls, v: str) -> str:
        return v.strip()

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # STRIPE_SECRET_KEY and stripe_secret_key both work
        "extra": "ignore",
        "frozen": True,
    }

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.resend_api_key)

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the credentials the API depends on are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.stripe_configured:
            errors.append(
                "STRIPE_SECRET_KEY is not set. "
                "Checkout requests will answer 500 'Stripe not configured'."
            )
        if not self.email_configured:
            errors.append(
                "RESEND_API_KEY is not set. "
                "Employment applications will be logged instead of emailed."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the Settings instance bound to this application."""
    settings: Optional[Settings] = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = Settings()
        request.app.state.settings = settings
    return settings
