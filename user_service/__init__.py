"""User Service — CRUD API for users over a pluggable persistence layer.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
