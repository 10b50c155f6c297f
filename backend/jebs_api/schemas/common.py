"""
Jeb's API — Shared Response Schemas
====================================

What:  Response models shared by several routes.
Who:   Health route, application route, and the error handlers (for docs).
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Returned by GET / and GET /api/health."""

    status: str = Field(default="ok", description="Always 'ok' while the process serves")
    service: str = Field(description="Service name, e.g. 'jebs-api'")


class SubmissionResponse(BaseModel):
    """Returned by POST /api/submit-application once the application is relayed or logged."""

    success: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    What:  Uniform error body for every failure.

    Example:
        {"error": "lineItems required"}
    """

    error: str = Field(description="Human-readable error description")
