"""
Jeb's API — Health Check Route
===============================

What:  Liveness endpoint for uptime monitors and the website's status ping.
How:   Answers without touching Stripe or Resend; a missing credential is a
       per-request 500 on the affected route, not an unhealthy service.
Who:   Monitors, load balancers, and anyone opening the API root in a browser.
"""

from fastapi import APIRouter, Depends

from jebs_api.config import Settings, get_settings
from jebs_api.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/",
    response_model=HealthResponse,
    summary="Service health check (root alias)",
)
@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns {'status': 'ok', 'service': <name>} while the process is serving.",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", service=settings.service_name)
