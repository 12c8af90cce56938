"""Constraint Enforcement — presence rule and per-clause checks against the raw string.

Invariants:
    - All functions are PURE: no IO, no logging, no side effects
    - Return an EnvbindError on violation, None on success
    - Presence is checked before any clause; optional + absent skips every clause
    - Clauses run in declaration order; first error wins
    - Checks read the RAW string, never the coerced value
    - Unrecognized format literals always pass

Design Decisions:
    - Return errors (not raise): checks chain with `or` like the other enforce_* rules,
      the binder raises whatever comes out first
    - Numeric bounds parse the raw string themselves, so a non-numeric value under
      min/max fails as a bounds error before coercion sees it (kept for compatibility)
"""

import re
from urllib.parse import urlsplit

from envbind.core.annotation import Clause, ParsedAnnotation
from envbind.core.coerce import parse_float
from envbind.core.domain_types import ALLOWED_URL_SCHEMES, URL_FORMAT, ConstraintKind
from envbind.core.errors import (
    AboveMaximumError,
    BelowMinimumError,
    EnvbindError,
    ErrorContext,
    InvalidConstraintDefinitionError,
    InvalidFormatError,
    NotInAllowedSetError,
    PatternMismatchError,
    RequiredValueMissingError,
)


ONEOF_SEPARATOR: str = ","


def is_absent(raw: str | None) -> bool:
    """Unset and explicitly empty are the same thing."""
    return raw is None or raw == ""


def check_presence(
    annotation: ParsedAnnotation, raw: str | None, field_name: str,
) -> EnvbindError | None:
    """Rule 1: a non-optional variable must be set and non-empty."""
    if is_absent(raw) and not annotation.optional:
        return RequiredValueMissingError(
            ErrorContext(field_name=field_name, env_key=annotation.key, raw_value=raw),
        )
    return None


def check_oneof(clause: Clause, raw: str, ctx: ErrorContext) -> EnvbindError | None:
    """oneof=a,b,c: exact, case-sensitive membership."""
    allowed = clause.argument.split(ONEOF_SEPARATOR)
    if raw not in allowed:
        return NotInAllowedSetError(allowed, ctx)
    return None


def _parse_bound(clause: Clause, ctx: ErrorContext) -> tuple[float | None, EnvbindError | None]:
    bound = parse_float(clause.argument)
    if bound is None:
        return None, InvalidConstraintDefinitionError(
            f"failed to parse {clause.kind.value} value '{clause.argument}' for "
            f"{ctx.field_name}, in annotation {clause.kind.value}=",
            ctx,
        )
    return bound, None


def check_min(clause: Clause, raw: str, ctx: ErrorContext) -> EnvbindError | None:
    """min=N: raw parses as a double and is >= N."""
    minimum, error = _parse_bound(clause, ctx)
    if error:
        return error

    value = parse_float(raw)
    if value is None:
        return BelowMinimumError(
            f"failed to parse float value in env var {ctx.env_key}, "
            f"for min constraint on field {ctx.field_name}",
            ctx,
        )
    if not value >= minimum:
        return BelowMinimumError(
            f"failed min value constraint for envvar[{ctx.env_key}] in record field "
            f"{ctx.field_name}, {clause.raw}",
            ctx,
        )
    return None


def check_max(clause: Clause, raw: str, ctx: ErrorContext) -> EnvbindError | None:
    """max=N: raw parses as a double and is <= N."""
    maximum, error = _parse_bound(clause, ctx)
    if error:
        return error

    value = parse_float(raw)
    if value is None:
        return AboveMaximumError(
            f"failed to parse float value in env var {ctx.env_key}, "
            f"for max constraint on field {ctx.field_name}",
            ctx,
        )
    if not value <= maximum:
        return AboveMaximumError(
            f"failed max value constraint for envvar[{ctx.env_key}] in record field "
            f"{ctx.field_name}, {clause.raw}",
            ctx,
        )
    return None


def check_regex(clause: Clause, raw: str, ctx: ErrorContext) -> EnvbindError | None:
    """regex=P: P compiles and is found somewhere in raw."""
    try:
        pattern = re.compile(clause.argument)
    except re.error as e:
        return InvalidConstraintDefinitionError(
            f"failed to compile env config regex '{clause.argument}' for field "
            f"{ctx.field_name}: {e}",
            ctx,
        )
    if pattern.search(raw) is None:
        return PatternMismatchError(clause.argument, ctx)
    return None


def is_valid_url(raw: str) -> bool:
    """Absolute http(s) URL with a non-empty host."""
    try:
        parts = urlsplit(raw)
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        return False
    if not parts.scheme or not parts.hostname:
        return False
    return parts.scheme.lower() in ALLOWED_URL_SCHEMES


def check_format(clause: Clause, raw: str, ctx: ErrorContext) -> EnvbindError | None:
    """format=URL is enforced; any other format literal passes."""
    if clause.argument != URL_FORMAT:
        return None
    if not is_valid_url(raw):
        return InvalidFormatError(URL_FORMAT, ctx)
    return None


CLAUSE_CHECKS = {
    ConstraintKind.ONEOF: check_oneof,
    ConstraintKind.MIN: check_min,
    ConstraintKind.MAX: check_max,
    ConstraintKind.REGEX: check_regex,
    ConstraintKind.FORMAT: check_format,
}


def check_clause(
    clause: Clause, raw: str, field_name: str, env_key: str,
) -> EnvbindError | None:
    """Dispatch one clause to its check."""
    check = CLAUSE_CHECKS.get(clause.kind)
    if check is None:
        return None
    ctx = ErrorContext(
        field_name=field_name, env_key=env_key, raw_value=raw, clause=clause.raw,
    )
    return check(clause, raw, ctx)


def validate_constraints(
    annotation: ParsedAnnotation, raw: str | None, field_name: str,
) -> EnvbindError | None:
    """Chain presence and every clause check. Returns first error or None.

    An optional, absent value returns None without evaluating any clause;
    callers must use is_absent() to decide whether to skip coercion.
    """
    error = check_presence(annotation, raw, field_name)
    if error or is_absent(raw):
        return error

    for clause in annotation.constraints:
        error = check_clause(clause, raw, field_name, annotation.key)
        if error:
            return error
    return None
