# Middleware package init
"""
Jeb's API — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS / pre-flight] → [Request ID] → [Logging] → Route Handler

    1. CORS first: OPTIONS is answered before anything else runs, and every
       response on the way out gets the cross-origin headers, 404s included.
    2. Request ID: correlation ID for the access line and service logs.
    3. Logging: method, path, status and duration of the request.
"""
