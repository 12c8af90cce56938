"""Core Layer — annotation parsing, constraint validation, coercion, binding.

Invariants:
    - No module in core/ imports from services/, schemas/, or infrastructure/
    - No IO and no logging: the only outside contact is the injected lookup callable

Design Decisions:
    - Functional core separated from imperative shell (services/ does logging and .env loading)
"""
