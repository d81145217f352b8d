"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every error body is an ErrorResponse envelope

Design Decisions:
    - Thin routes delegate to UserService, which returns status + body
"""
