"""Services Layer — per-operation orchestration of validation, storage and envelopes.

Invariants:
    - Services are framework-free: no FastAPI imports
    - Recoverable errors become ServiceResponse bodies, fatal errors propagate
"""
