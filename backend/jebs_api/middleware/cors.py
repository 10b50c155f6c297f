"""
Jeb's API — Cross-Origin Middleware
====================================

What:  Answers every OPTIONS request with an empty 204 and stamps the
       cross-origin headers on every other response.
How:   Outermost Starlette middleware. OPTIONS never reaches the router, so
       pre-flight behaves the same for known and unknown paths.
Who:   Registered by create_app() with the configured CORS_ORIGIN.

Starlette's CORSMiddleware only reacts when the browser sends an Origin
header and answers pre-flight with 200 text/plain. The website contract is
stricter: a fixed header set on every response and 204 for OPTIONS.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from jebs_api.responses import cors_headers, preflight_response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. OPTIONS, any path → 204, no body, cross-origin headers
        2. Anything else     → route response + cross-origin headers
    """

    def __init__(self, app: ASGIApp, allow_origin: str = "*") -> None:
        super().__init__(app)
        self.allow_origin = allow_origin
        self._headers = cors_headers(allow_origin)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return preflight_response(self.allow_origin)

        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers[name] = value
        return response
