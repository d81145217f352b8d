"""Pydantic Schemas — wire models for the REST API.

Invariants:
    - Schemas check wire types at the system boundary; field rules live in core/
    - camelCase on the wire, snake_case in Python

Design Decisions:
    - Envelope headers separate from the User resource: every message carries one
"""
