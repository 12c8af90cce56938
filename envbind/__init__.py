"""envbind — bind environment variables into declared configuration records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, e.g. `from envbind.services.load_env import load`
"""
