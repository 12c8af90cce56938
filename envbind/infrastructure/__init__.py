"""Infrastructure Layer — environment sources and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ binding logic
    - Every environment source is exposed as a plain lookup(key) -> str | None callable

Design Decisions:
    - Adapters over a registry: callers pick a source explicitly (ADR: explicit over implicit)
"""
