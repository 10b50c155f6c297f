"""
Jeb's API — Application Package Initializer
============================================

What: Marks the `jebs_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn jebs_api.main:app`), pytest, and the
      `jebs-api` / `jebs-logo` console scripts.

Architecture Note:
    The backend keeps the same thin layering throughout:

    ┌─────────────────────────────────────┐
    │      Middleware (CORS, IDs, logs)   │  ← every request, every response
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← read body, call service, return
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, transcript, errors
    ├─────────────────────────────────────┤
    │   Provider adapters (Stripe, Resend)│  ← one outbound call per request
    └─────────────────────────────────────┘

    Nothing is persisted. The only state shared between requests is the
    immutable Settings object stored on `app.state`.
"""

__version__ = "1.0.0"
