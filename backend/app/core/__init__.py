"""Core Layer — pure domain logic: validation, envelopes, errors, contracts.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Functions are pure; the only non-determinism is id/timestamp generation
      in envelope.py

Design Decisions:
    - Functional core separated from imperative shell
"""
