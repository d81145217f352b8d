"""Infrastructure Layer — storage, concurrency, auth and cross-cutting concerns.

Invariants:
    - Implements core/ contracts; core never imports from here
    - No IO while holding the repository lock

Design Decisions:
    - In-memory repository behind the UserRepository Protocol: swapping in a
      persistent store touches only this package and api/dependencies.py
"""
