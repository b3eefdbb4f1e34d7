"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, API responses)

Design Decisions:
    - Separate from models and core entities: schemas are API contracts
"""
