"""Type Coercion — converts a validated raw string into the field's declared type.

Invariants:
    - TEXT is identity: every string is valid, including ""
    - INTEGER accepts only [+-]?[0-9]+ within signed 64-bit range (no whitespace, no "_")
    - FLOAT accepts decimal/scientific literals and inf/infinity/nan; finite literals
      that overflow a double are rejected
    - Runs only AFTER presence and constraint checks succeed

Design Decisions:
    - Regex gate before int()/float(): Python's parsers also accept whitespace,
      underscores and non-ASCII digits, which environment values must not
"""

import math
import re

from envbind.core.domain_types import INT64_MAX, INT64_MIN, DeclaredType
from envbind.core.errors import CoercionError, ErrorContext, UnsupportedFieldTypeError


INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
FLOAT_LITERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
SPECIAL_FLOAT_LITERAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)


def parse_integer(raw: str) -> int | None:
    """Base-10 integer within int64 range, or None."""
    if not INTEGER_LITERAL.fullmatch(raw):
        return None
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(raw: str) -> float | None:
    """64-bit double from a decimal/scientific or special literal, or None."""
    if SPECIAL_FLOAT_LITERAL.fullmatch(raw):
        return float(raw)
    if not FLOAT_LITERAL.fullmatch(raw):
        return None
    value = float(raw)
    if math.isinf(value):
        return None
    return value


def coerce_value(
    declared_type: DeclaredType, raw: str, context: ErrorContext | None = None,
) -> str | int | float:
    """Convert raw to declared_type.

    Raises:
        CoercionError: raw is not a valid literal for declared_type.
        UnsupportedFieldTypeError: declared_type is not a DeclaredType member.
    """
    ctx = context or ErrorContext()
    ctx.raw_value = raw

    if declared_type is DeclaredType.TEXT:
        return raw
    if declared_type is DeclaredType.INTEGER:
        value = parse_integer(raw)
    elif declared_type is DeclaredType.FLOAT:
        value = parse_float(raw)
    else:
        raise UnsupportedFieldTypeError(str(declared_type), ctx)

    if value is None:
        raise CoercionError(declared_type.value, ctx)
    return value
