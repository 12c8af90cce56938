"""Schema Layer — Pydantic field definitions and schema builders at the caller boundary."""
