"""
Jeb's API — Employment Application Route Handler
=================================================

What:  POST /api/submit-application
How:   Reads the raw body and hands it to ApplicationService, which accepts
       any flat JSON object (no fixed schema).
Who:   The website's "Join the team" form.
"""

from fastapi import APIRouter, Depends, Request

from jebs_api.dependencies import get_application_service
from jebs_api.schemas.common import ErrorResponse, SubmissionResponse
from jebs_api.services.application_service import ApplicationService

router = APIRouter(prefix="/api", tags=["Applications"])


@router.post(
    "/submit-application",
    response_model=SubmissionResponse,
    responses={
        200: {"description": "Application relayed (or logged)", "model": SubmissionResponse},
        500: {"description": "Unparseable body or email delivery failure", "model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "additionalProperties": {"type": ["string", "boolean", "null"]},
                    },
                }
            },
        }
    },
    summary="Submit an employment application",
)
async def submit_application(
    request: Request,
    service: ApplicationService = Depends(get_application_service),
) -> SubmissionResponse:
    raw_body = await request.body()
    await service.submit(raw_body)
    return SubmissionResponse(success=True)
