"""Services Layer — business logic between routes and repositories.

Invariants:
    - Services depend on core protocols only, never on a concrete adapter
"""
