"""Serialization — render bound record fields back to environment-string form.

Invariants:
    - TEXT and INTEGER round-trip: the rendered string equals the accepted raw string
      (for canonical integer literals, i.e. no leading "+" or zeros)
    - FLOAT renders with repr(): shortest string that parses back to the same double
"""

from typing import Any, Sequence

from envbind.core.binder import FieldDefinition, prepare_fields
from envbind.core.domain_types import DeclaredType


def to_env_string(declared_type: DeclaredType, value: str | int | float) -> str:
    if declared_type is DeclaredType.TEXT:
        return value
    if declared_type is DeclaredType.FLOAT:
        return repr(float(value))
    return str(value)


def dump_env(fields: Sequence[FieldDefinition], record: Any) -> dict[str, str]:
    """Map each field's env key to its current value rendered as a string.

    Duplicate keys keep the value of the last field declared with that key.
    """
    return {
        annotation.key: to_env_string(spec.declared_type, getattr(record, spec.name))
        for spec, annotation in prepare_fields(fields)
    }
