"""Database Infrastructure — SQLAlchemy declarative Base for the relational store.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
