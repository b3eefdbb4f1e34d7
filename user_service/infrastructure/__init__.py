"""Infrastructure Layer — store adapters, cache, clients, and cross-cutting concerns.

Invariants:
    - Adapters implement core.repository_protocols; core never imports from here
    - Store failures mapped to core.errors types; no retries

Design Decisions:
    - One adapter per storage technology, selected by storage_factory
"""
