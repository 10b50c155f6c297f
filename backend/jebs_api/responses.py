"""
Jeb's API — Response Builder
=============================

What:  Builds JSON responses that always carry the cross-origin headers.
Who:   The CORS middleware (for headers on every response) and the exception
       handlers in main.py (for error bodies).

Every response leaving the API has:
    Content-Type: application/json              (except the 204 pre-flight)
    Access-Control-Allow-Origin: <CORS_ORIGIN or *>
    Access-Control-Allow-Methods: GET, POST, OPTIONS
    Access-Control-Allow-Headers: Content-Type
"""

from typing import Any, Dict

from fastapi.responses import JSONResponse, Response

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def cors_headers(origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def json_response(content: Any, origin: str, status_code: int = 200) -> JSONResponse:
    """Serialize `content` as JSON with the cross-origin headers attached."""
    return JSONResponse(content=content, status_code=status_code, headers=cors_headers(origin))


def error_response(message: str, origin: str, status_code: int = 500) -> JSONResponse:
    """`{"error": message}` with the given status."""
    return json_response({"error": message}, origin, status_code=status_code)


def preflight_response(origin: str) -> Response:
    """Empty 204 answer to an OPTIONS request."""
    return Response(status_code=204, headers=cors_headers(origin))
