"""Core Layer — domain entities, errors, protocols and pure rules. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Everything except the repository protocols is pure and synchronous

Design Decisions:
    - Functional core separated from imperative shell: adapters and the factory
      live in infrastructure/, selection rules and validation live here
"""
