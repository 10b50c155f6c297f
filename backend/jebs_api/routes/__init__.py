# Routes package init
"""
Jeb's API — API Routes Package
===============================

Route Inventory:
    - health.py:        GET  /  and  GET /api/health
    - checkout.py:      POST /api/create-checkout-session
    - applications.py:  POST /api/submit-application

Everything else answers 404 {"error": "Not found"}; OPTIONS on any path is
answered by the CORS middleware before routing.

Routes stay thin: read the body, call the service, return the model.
"""
